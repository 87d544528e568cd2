import scrapy
from scrapy.http import TextResponse

from geipan.batching import BatchState, DEFAULT_THRESHOLD, advance_batch
from geipan.extract import (
    SIDEBAR_EXPECTED,
    extract_case,
    extract_listing_links,
    extract_testimony,
    listing_url,
    sidebar_block_count,
)
from geipan.items import CaseItem

NO_RESULT_MARKER = "Aucun résultat"

# Error pages reach the callbacks as data; 3xx still go through RedirectMiddleware.
ERROR_STATUSES = list(range(400, 600))


def as_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def requested_url(response):
    return (response.meta.get("redirect_urls") or [response.url])[0]


def page_text(response):
    if isinstance(response, TextResponse):
        return response.text
    return response.body.decode("utf-8", errors="replace")


class PageCrawl:
    """One listing page being processed: a slot per case link, in link order."""

    def __init__(self, page: int, url: str, size: int):
        self.page = page
        self.url = url
        self.cases = [None] * size
        self.remaining = size
        self.failed = False


class PendingCase:
    def __init__(self, case: CaseItem, size: int):
        self.case = case
        self.testimonials = [None] * size
        self.remaining = size

    def build(self):
        return CaseItem(self.case, testimonials=list(self.testimonials))


class CasesSpider(scrapy.Spider):
    name = "cases"
    allowed_domains = ["www.cnes-geipan.fr"]

    def __init__(self, start_page=None, threshold=None, discard_on_flush=None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.start_page = start_page
        self.threshold = threshold
        self.discard_on_flush = discard_on_flush

        self.batch = BatchState()
        self.status_code = 0
        self.is_empty = False

    @classmethod
    def from_crawler(cls, crawler, *args, **kwargs):
        spider = super().from_crawler(crawler, *args, **kwargs)
        spider.configure(crawler.settings)
        return spider

    def configure(self, settings):
        if self.start_page is None:
            self.start_page = settings.getint("GEIPAN_START_PAGE", 0)
        if self.threshold is None:
            self.threshold = settings.getint("GEIPAN_BATCH_THRESHOLD", DEFAULT_THRESHOLD)
        if self.discard_on_flush is None:
            self.discard_on_flush = settings.getbool("GEIPAN_DISCARD_ON_FLUSH", False)

        try:
            self.start_page = int(self.start_page)
            self.threshold = int(self.threshold)
        except ValueError:
            self.logger.warning("Invalid start_page/threshold (%r, %r); using defaults.",
                                self.start_page, self.threshold)
            self.start_page, self.threshold = 0, DEFAULT_THRESHOLD
        self.discard_on_flush = as_bool(self.discard_on_flush)

    def listing_request(self, page: int):
        return scrapy.Request(
            listing_url(page),
            headers={"Content-Type": "text/html"},
            callback=self.parse,
            errback=self.on_listing_error,
            cb_kwargs={"page": page},
            meta={"handle_httpstatus_list": ERROR_STATUSES},
            dont_filter=True,
        )

    def start_requests(self):
        yield self.listing_request(self.start_page)

    def parse(self, response, page=0, **kwargs):
        self.status_code = response.status
        self.is_empty = NO_RESULT_MARKER in page_text(response)
        self.logger.info("%s %s", response.url, response.status)
        self.crawler.stats.inc_value("geipan/listing_pages")

        try:
            links = [] if self.is_empty else extract_listing_links(response)
        except Exception:
            self.logger.exception("Extraction failed for listing %s", response.url)
            self.crawler.stats.inc_value("geipan/page_failed")
            yield from self.next_page(page)
            return

        crawl = PageCrawl(page, response.url, len(links))
        if not links:
            yield from self.finish_page(crawl)
            return

        for slot, link in enumerate(links):
            yield scrapy.Request(
                link,
                callback=self.parse_case,
                errback=self.on_page_error,
                cb_kwargs={"crawl": crawl, "slot": slot},
                meta={"handle_httpstatus_list": ERROR_STATUSES},
                dont_filter=True,
            )

    def parse_case(self, response, crawl, slot):
        if crawl.failed:
            return
        try:
            case, testimony_links = extract_case(response, url=requested_url(response))
            blocks = sidebar_block_count(response)
        except Exception:
            self.logger.exception("Extraction failed for case %s", response.url)
            yield from self.abandon_page(crawl)
            return

        self.crawler.stats.inc_value("geipan/cases")
        if blocks != SIDEBAR_EXPECTED:
            self.crawler.stats.inc_value("geipan/sidebar_mismatch")
        pending = PendingCase(case, len(testimony_links))
        if not testimony_links:
            yield from self.case_done(crawl, slot, pending.build())
            return

        for tslot, entry in enumerate(testimony_links):
            yield scrapy.Request(
                response.urljoin(entry["link"]),
                callback=self.parse_testimony,
                errback=self.on_page_error,
                cb_kwargs={"crawl": crawl, "slot": slot, "pending": pending, "tslot": tslot},
                meta={"handle_httpstatus_list": ERROR_STATUSES},
                dont_filter=True,
            )

    def parse_testimony(self, response, crawl, slot, pending, tslot):
        if crawl.failed:
            return
        try:
            testimony = extract_testimony(response, url=requested_url(response))
        except Exception:
            self.logger.exception("Extraction failed for testimony %s", response.url)
            yield from self.abandon_page(crawl)
            return

        self.crawler.stats.inc_value("geipan/testimonials")
        pending.testimonials[tslot] = testimony
        pending.remaining -= 1
        if pending.remaining == 0:
            yield from self.case_done(crawl, slot, pending.build())

    def case_done(self, crawl, slot, case):
        crawl.cases[slot] = case
        crawl.remaining -= 1
        if crawl.remaining == 0:
            yield from self.finish_page(crawl)

    def finish_page(self, crawl):
        if not self.is_empty:
            previous = self.batch
            self.batch, flushed = advance_batch(previous, crawl.cases, self.threshold, self.discard_on_flush)
            if self.batch.index != previous.index:
                self.crawler.stats.inc_value("geipan/batch_rollovers")
                self.logger.info("Batch %d rolled over (%s)", previous.index,
                                 "discarded" if self.discard_on_flush else "written")
            yield from flushed
            self.logger.info("%s [DONE]", crawl.url)

        yield self.batch.to_item()
        yield from self.next_page(crawl.page)

    def next_page(self, page: int):
        if self.status_code == 200 and not self.is_empty:
            yield self.listing_request(page + 1)
        else:
            self.logger.info("Stopping after page %d (status=%s, empty=%s)",
                             page, self.status_code, self.is_empty)

    def abandon_page(self, crawl):
        if crawl.failed:
            return
        crawl.failed = True
        self.crawler.stats.inc_value("geipan/page_failed")
        self.logger.error("Abandoning listing page %d (%s)", crawl.page, crawl.url)
        yield from self.next_page(crawl.page)

    def on_page_error(self, failure):
        crawl = failure.request.cb_kwargs["crawl"]
        if crawl.failed:
            return
        self.logger.error("Request failed for %s: %r", failure.request.url, failure.value)
        yield from self.abandon_page(crawl)

    def on_listing_error(self, failure):
        page = failure.request.cb_kwargs["page"]
        self.logger.error("Listing page %s failed: %r", failure.request.url, failure.value)
        self.crawler.stats.inc_value("geipan/page_failed")
        yield from self.next_page(page)
