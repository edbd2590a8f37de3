"""Shared fixtures: an in-memory Redis double and sample day pages."""
from typing import Dict, List, Optional, Tuple

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError


class FakeRedis:
    """Minimal async stand-in for the two Redis commands the cache uses."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = False):
        self.store: Dict[str, str] = {}
        self.ttls: Dict[str, Optional[int]] = {}
        self.calls: List[Tuple[str, str]] = []
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get(self, key):
        self.calls.append(("get", key))
        if self.fail_reads:
            raise RedisConnectionError("redis is down")
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.calls.append(("set", key))
        if self.fail_writes:
            raise RedisConnectionError("redis is down")
        self.store[key] = value
        self.ttls[key] = ex
        return True


SCENARIO_PAGE = """
<html><body>
  <div itemprop="suggestedAnswer"><span itemprop="text">Именины у Ивана, Петра</span></div>
  <div itemprop="acceptedAnswer"><span itemprop="text">Новый год</span></div>
  <div class="event_block"><div class="event">• Принят первый закон</div></div>
</body></html>
"""

FULL_PAGE = """
<html><body>
  <div class="listing">
    <div itemprop="acceptedAnswer">
      <span itemprop="text">День народного единства</span>
    </div>
    <div itemprop="suggestedAnswer">
      <span itemprop="text">Казанская икона Божией Матери</span>
    </div>
    <div itemprop="suggestedAnswer">
      <span itemprop="text">Именины у <a href="/i">Ивана</a>, <a href="/g">Григория</a>, Павла</span>
    </div>
    <div itemprop="suggestedAnswer">
      <span itemprop="text">День рождения   почтовой
        открытки</span>
    </div>
  </div>
  <div class="event_block">
    <div class="event">• 1922 — Открыта гробница Тутанхамона</div>
    <div class="event">1957 — Запущен второй спутник</div>
  </div>
  <div class="event">Не событие дня</div>
</body></html>
"""


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def scenario_page():
    return SCENARIO_PAGE


@pytest.fixture
def full_page():
    return FULL_PAGE
