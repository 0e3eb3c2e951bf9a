import os
from dotenv import load_dotenv

load_dotenv()


def _get_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {value}")
    return value


class Config:
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'

    # Bytes pulled from a stream source per chunk for streamed contracts
    STREAM_CHUNK_SIZE = _get_int('STREAM_CHUNK_SIZE', 64 * 1024)

    # Pagination query params (?page=&pageSize=)
    DEFAULT_PAGE_SIZE = _get_int('DEFAULT_PAGE_SIZE', 20)
    MAX_PAGE_SIZE = _get_int('MAX_PAGE_SIZE', 500)

    # Comma-separated list, "*" for any origin
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv('CORS_ORIGINS', '*').split(',')
        if origin.strip()
    ] or ['*']
