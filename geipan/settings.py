# Scrapy settings for the geipan project
#
# Only the settings this project relies on are listed. See:
# https://docs.scrapy.org/en/latest/topics/settings.html
import os

BOT_NAME = "geipan"

SPIDER_MODULES = ["geipan.spiders"]
NEWSPIDER_MODULE = "geipan.spiders"

# The crawl is a plain sequential walk: no robots.txt, no cookies, no retries.
ROBOTSTXT_OBEY = False
COOKIES_ENABLED = False
RETRY_ENABLED = False

ITEM_PIPELINES = {
    "geipan.pipelines.JsonBatchPipeline": 300,
}

GEIPAN_OUTPUT_DIR = os.getenv("GEIPAN_OUTPUT_DIR", ".")
GEIPAN_FILE_PREFIX = os.getenv("GEIPAN_FILE_PREFIX", "geipan")
GEIPAN_BATCH_THRESHOLD = int(os.getenv("GEIPAN_BATCH_THRESHOLD", "200"))
GEIPAN_DISCARD_ON_FLUSH = os.getenv("GEIPAN_DISCARD_ON_FLUSH", "0")
GEIPAN_START_PAGE = int(os.getenv("GEIPAN_START_PAGE", "0"))

LOG_LEVEL = os.getenv("GEIPAN_LOGLEVEL", "INFO")

TWISTED_REACTOR = "twisted.internet.asyncioreactor.AsyncioSelectorReactor"
FEED_EXPORT_ENCODING = "utf-8"
