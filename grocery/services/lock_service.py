# grocery/services/lock_service.py
import redis
from redis.exceptions import RedisError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from grocery.utils.settings import REDIS_URL, WEBHOOK_EVENT_TTL_SECONDS
from grocery.utils.logging import get_logger

logger = get_logger(__name__)


#tenacity retry
def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(RedisError),
    )


class LockService:
    """
    -rezerwacja id zdarzenia z bramki (SET NX EX)
    -zwolnienie rezerwacji gdy przetwarzanie sie nie uda
    Powtorzone zdarzenie nie jest przetwarzane drugi raz.
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(event_id: str) -> str:
        return f"payment:event:{event_id}"

    @redis_retry()
    def claim_event(self, event_id: str, ttl: int = WEBHOOK_EVENT_TTL_SECONDS) -> bool:
        key = self._key(event_id)
        logger.info(f"Claim {key}")
        #SET payment:event:evt_1 "1" NX EX 86400
        return bool(self.redis.set(name=key, value="1", nx=True, ex=ttl))

    @redis_retry()
    def release_event(self, event_id: str) -> bool:
        key = self._key(event_id)
        logger.info(f"Release {key}")
        return bool(self.redis.delete(key))
