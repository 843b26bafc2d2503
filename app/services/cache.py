"""Catalog caching service.

정규화된 제품 목록을 메모리에만 잠시 보관하여,
같은 범위(range)의 카탈로그를 반복 요청할 때 스프레드시트 API 호출을 줄입니다.
서버 측 영구 저장소는 사용하지 않습니다 (프로세스 재시작 시 사라짐).

주요 기능:
- 범위(range) 문자열 기반 캐시키
- 초 단위 TTL (Time-To-Live), 0이면 캐시 비활성화
- 최대 엔트리 수 초과 시 가장 오래된 엔트리 제거
- 캐시 히트율 통계

사용 예시:
    cache = get_catalog_cache()

    cached = cache.get("Products!A:ZZZ")
    if cached is not None:
        return cached

    products = await load()
    cache.set("Products!A:ZZZ", products)
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional, Dict

from app.config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """캐시 엔트리."""
    value: Any
    created_at: float
    expires_at: float
    hit_count: int = 0


@dataclass
class CacheStats:
    """캐시 통계."""
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """캐시 히트율 계산."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class CatalogCache:
    """
    메모리 기반 카탈로그 캐시.

    Attributes:
        ttl_seconds: 캐시 만료 시간 (초). 0 이하이면 저장하지 않습니다.
        max_entries: 최대 엔트리 수
    """

    def __init__(self, ttl_seconds: int = 300, max_entries: int = 16):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._entries: Dict[str, CacheEntry] = {}
        self._stats = CacheStats()

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def get(self, key: str) -> Optional[Any]:
        """
        캐시에서 값 조회. 만료된 엔트리는 자동으로 제거됩니다.

        Returns:
            캐시된 값. 없거나 만료되면 None.
        """
        now = time.time()
        entry = self._entries.get(key)
        if entry is not None:
            if now < entry.expires_at:
                entry.hit_count += 1
                self._stats.hits += 1
                logger.debug(f"[CatalogCache] 캐시 히트: {key}")
                return entry.value
            del self._entries[key]
            self._stats.evictions += 1

        self._stats.misses += 1
        logger.debug(f"[CatalogCache] 캐시 미스: {key}")
        return None

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        """캐시에 값 저장."""
        ttl = ttl_seconds if ttl_seconds is not None else self.ttl_seconds
        if ttl <= 0:
            return

        # 최대 크기 초과 시 가장 오래된 엔트리 제거
        if key not in self._entries and len(self._entries) >= self.max_entries:
            oldest_key = min(self._entries, key=lambda k: self._entries[k].created_at)
            del self._entries[oldest_key]
            self._stats.evictions += 1

        now = time.time()
        self._entries[key] = CacheEntry(value=value, created_at=now, expires_at=now + ttl)
        logger.debug(f"[CatalogCache] 캐시 저장: {key} (TTL={ttl}s)")

    def delete(self, key: str) -> bool:
        """캐시에서 값 삭제. 삭제 여부를 반환합니다."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """모든 캐시 삭제. 삭제된 엔트리 수를 반환합니다."""
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"[CatalogCache] 캐시 초기화: {count}개 삭제")
        return count

    @property
    def stats(self) -> CacheStats:
        """캐시 통계 반환."""
        return self._stats

    def get_stats_summary(self) -> str:
        """캐시 통계 요약 문자열."""
        return (
            f"히트: {self._stats.hits}, "
            f"미스: {self._stats.misses}, "
            f"히트율: {self._stats.hit_rate:.1%}, "
            f"엔트리: {len(self._entries)}"
        )


# 싱글톤 인스턴스
_catalog_cache: Optional[CatalogCache] = None


def get_catalog_cache() -> CatalogCache:
    """CatalogCache 싱글톤 인스턴스 반환."""
    global _catalog_cache
    if _catalog_cache is None:
        _catalog_cache = CatalogCache(ttl_seconds=get_settings().catalog_ttl_seconds)
    return _catalog_cache
