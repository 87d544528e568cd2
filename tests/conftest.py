from __future__ import annotations

import pytest
from scrapy.utils.test import get_crawler

from geipan.spiders.cases import CasesSpider


@pytest.fixture
def make_spider():
    def _make(settings: dict | None = None, **kwargs) -> CasesSpider:
        crawler = get_crawler(CasesSpider, settings or {})
        return CasesSpider.from_crawler(crawler, **kwargs)
    return _make
