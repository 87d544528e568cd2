# Define here the models for your scraped items
#
# See documentation in:
# https://docs.scrapy.org/en/latest/topics/items.html
#
# Field names are the keys written to the batch files. Extractors set every
# field explicitly; a value missing from the markup is None.

import scrapy


class DocumentLink(scrapy.Item):
    name = scrapy.Field()              # trimmed anchor text
    link = scrapy.Field()              # raw href, left relative


class LocationItem(scrapy.Item):
    observationType = scrapy.Field()
    specificityObservation = scrapy.Field()
    shape = scrapy.Field()
    color = scrapy.Field()
    size = scrapy.Field()
    numberEvent = scrapy.Field()       # number of phenomena observed, free text


class TestimonyItem(scrapy.Item):
    geipan_id = scrapy.Field()         # last segment of the testimony URL
    cas_title = scrapy.Field()         # parent case title as shown on the testimony page
    observationAt = scrapy.Field()
    age = scrapy.Field()               # int, or float("nan") when unparsable
    gender = scrapy.Field()            # gender code as rendered
    environment = scrapy.Field()
    localTime = scrapy.Field()
    environment2 = scrapy.Field()
    distanceEventWitness = scrapy.Field()
    location = scrapy.Field()          # LocationItem


class CaseItem(scrapy.Item):
    # Core identity
    geipan_id = scrapy.Field()         # last segment of the detail URL, e.g. 1977-03-00456
    title = scrapy.Field()
    shortDescription = scrapy.Field()
    description = scrapy.Field()

    # Sidebar, assigned by position
    observationAt = scrapy.Field()
    region = scrapy.Field()
    department = scrapy.Field()
    classification = scrapy.Field()    # 'A' | 'B' | 'C' | 'D'
    modifiedAt = scrapy.Field()
    typeEvent = scrapy.Field()
    strange = scrapy.Field()           # float, 0 when unparsable
    consistance = scrapy.Field()       # float, 0 when unparsable

    # Links & nested records
    documents = scrapy.Field()         # [DocumentLink]
    testimonials = scrapy.Field()      # [TestimonyItem], request order


class BatchItem(scrapy.Item):
    index = scrapy.Field()             # batch file number
    cases = scrapy.Field()             # [CaseItem] currently held for that file
