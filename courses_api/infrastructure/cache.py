import json
import redis
import structlog
from typing import Optional, Any
from ..config import settings

logger = structlog.get_logger()

_redis_client: Optional[redis.Redis] = None

def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True
        )
    return _redis_client

def get_cache(key: str) -> Optional[Any]:
    """Получить значение из кэша"""
    if not settings.CACHE_ENABLED:
        return None
    try:
        client = get_redis()
        value = client.get(key)
        if value:
            return json.loads(value)
    except Exception as e:
        # Если Redis недоступен, работаем без кэша
        logger.debug("cache_unavailable", op="get", key=key, error=str(e))
    return None

def _version_key(key: str) -> str:
    return f"version:{key}"

def get_version(key: str) -> Optional[int]:
    """Текущая версия ключа; None, если кэш выключен или Redis недоступен"""
    if not settings.CACHE_ENABLED:
        return None
    try:
        client = get_redis()
        return int(client.get(_version_key(key)) or 0)
    except Exception as e:
        logger.debug("cache_unavailable", op="get_version", key=key, error=str(e))
        return None

def bump_version(key: str) -> None:
    if not settings.CACHE_ENABLED:
        return
    try:
        get_redis().incr(_version_key(key))
    except Exception as e:
        logger.debug("cache_unavailable", op="bump_version", key=key, error=str(e))

def set_cache(key: str, value: Any, ttl: int = None, version: Optional[int] = None) -> bool:
    """Сохранить значение в кэш.

    С version запись делается только если с момента чтения версии ключ
    никто не инвалидировал (WATCH на ключе версии).
    """
    if not settings.CACHE_ENABLED:
        return False
    try:
        client = get_redis()
        ttl = ttl or settings.CACHE_TTL
        payload = json.dumps(value, ensure_ascii=False)
        if version is None:
            client.setex(key, ttl, payload)
            return True
        with client.pipeline() as pipe:
            pipe.watch(_version_key(key))
            if int(pipe.get(_version_key(key)) or 0) != version:
                pipe.unwatch()
                return False
            pipe.multi()
            pipe.setex(key, ttl, payload)
            pipe.execute()
        return True
    except redis.WatchError:
        # версию увеличили между проверкой и записью
        return False
    except Exception as e:
        logger.debug("cache_unavailable", op="set", key=key, error=str(e))
        return False

def delete_cache(key: str) -> bool:
    """Удалить значение из кэша"""
    if not settings.CACHE_ENABLED:
        return False
    try:
        client = get_redis()
        client.delete(key)
        return True
    except Exception as e:
        logger.debug("cache_unavailable", op="delete", key=key, error=str(e))
        return False

def delete_cache_pattern(pattern: str) -> int:
    """Удалить все ключи по паттерну"""
    if not settings.CACHE_ENABLED:
        return 0
    try:
        client = get_redis()
        keys = client.keys(pattern)
        if keys:
            return client.delete(*keys)
        return 0
    except Exception as e:
        logger.debug("cache_unavailable", op="delete_pattern", pattern=pattern, error=str(e))
        return 0

def invalidate_course(course_id: int) -> None:
    """Сбросить кэш списка курсов и самого курса после изменения.

    Сначала версия, потом удаление: чтение, начатое до изменения, уже не
    сможет записать старые данные.
    """
    bump_version("courses:list")
    bump_version(f"course:{course_id}")
    delete_cache_pattern("courses:list*")
    delete_cache(f"course:{course_id}")
