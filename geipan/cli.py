import argparse
import os

from scrapy.crawler import CrawlerProcess
from scrapy.utils.project import get_project_settings

from geipan.spiders.cases import CasesSpider


def build_settings(args):
    os.environ.setdefault("SCRAPY_SETTINGS_MODULE", "geipan.settings")
    settings = get_project_settings()
    if args.output_dir:
        settings.set("GEIPAN_OUTPUT_DIR", args.output_dir, priority="cmdline")
    if args.prefix:
        settings.set("GEIPAN_FILE_PREFIX", args.prefix, priority="cmdline")
    if args.threshold is not None:
        settings.set("GEIPAN_BATCH_THRESHOLD", args.threshold, priority="cmdline")
    if args.start_page is not None:
        settings.set("GEIPAN_START_PAGE", args.start_page, priority="cmdline")
    if args.discard_on_flush:
        settings.set("GEIPAN_DISCARD_ON_FLUSH", True, priority="cmdline")
    if args.loglevel:
        settings.set("LOG_LEVEL", args.loglevel.upper(), priority="cmdline")
    return settings


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Crawl GEIPAN cases into numbered JSON batch files.")
    ap.add_argument("--output-dir", help="directory for the batch files")
    ap.add_argument("--prefix", help="batch file name prefix (default: geipan)")
    ap.add_argument("--start-page", type=int, help="first listing page (default: 0)")
    ap.add_argument("--threshold", type=int, help="roll over once a batch holds more cases than this")
    ap.add_argument("--discard-on-flush", action="store_true",
                    help="drop the full batch on rollover instead of writing it")
    ap.add_argument("--loglevel", help="DEBUG, INFO, WARNING, ...")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    process = CrawlerProcess(build_settings(args))
    process.crawl(CasesSpider)
    process.start()


if __name__ == "__main__":
    main()
