# Define your item pipelines here
#
# Don't forget to add your pipeline to the ITEM_PIPELINES setting
# See: https://docs.scrapy.org/en/latest/topics/item-pipeline.html
import json
import logging
from pathlib import Path

# useful for handling different item types with a single interface
from itemadapter import ItemAdapter

from geipan.items import BatchItem
from geipan.utility import json_safe

logger = logging.getLogger(__name__)


def batch_path(output_dir, prefix: str, index: int):
    return Path(output_dir) / f"{prefix}{index}.json"


def dump_batch(path: Path, cases):
    records = [json_safe(ItemAdapter(case).asdict()) for case in cases]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, ensure_ascii=False, allow_nan=False), encoding="utf-8")
    return len(records)


def load_batch(path):
    return json.loads(Path(path).read_text(encoding="utf-8"))


class JsonBatchPipeline:
    def __init__(self, output_dir: str, prefix: str):
        self.output_dir = output_dir
        self.prefix = prefix

    @classmethod
    def from_crawler(cls, crawler):
        s = crawler.settings
        return cls(s.get("GEIPAN_OUTPUT_DIR", "."), s.get("GEIPAN_FILE_PREFIX", "geipan"))

    def process_item(self, item, spider):
        if not isinstance(item, BatchItem):
            return item
        adapter = ItemAdapter(item)
        path = batch_path(self.output_dir, self.prefix, adapter["index"])
        count = dump_batch(path, adapter.get("cases") or [])
        logger.info("Wrote %d cases to %s", count, path)
        return item
