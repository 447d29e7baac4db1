# app/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from app.domain.errors import StorageUnavailable
from app.utils.settings import STARTUP_WAIT_ATTEMPTS


#tylko przy starcie, requesty nie sa ponawiane
def store_ready_retry(attempts: int | None = None):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts or STARTUP_WAIT_ATTEMPTS),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(StorageUnavailable),
    )
