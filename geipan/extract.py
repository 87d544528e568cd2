"""Selector-based extraction for GEIPAN listing, case and testimony pages.

Every function takes a Scrapy response (or anything exposing ``.css`` and
``.url``) and never raises on missing markup: an element that is not there
becomes ``None`` in the resulting item.
"""
import logging

from geipan.items import CaseItem, DocumentLink, LocationItem, TestimonyItem
from geipan.utility import (
    all_texts,
    contains,
    first_text,
    last_segment,
    parse_float_or_zero,
    parse_int_or_nan,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://www.cnes-geipan.fr"
LISTING_URL = f"{BASE_URL}/fr/recherche/cas/tab?"

CASE_LINK_SELECTOR = ".custom-link-to > a"
SEARCH_LINK_MARKER = "recherche"
TESTIMONY_LINK_MARKER = "temoignage"

TITLE_SELECTOR = ".cas__title > h2"
SHORT_DESCRIPTION_SELECTOR = ".cas__chapo .field-value"
DESCRIPTION_SELECTOR = ".cas__body .field-value"
SIDEBAR_SELECTOR = ".sidebar-bloc .one_info-data"
DOCUMENTS_SELECTOR = ".documents a"
TESTIMONIES_SELECTOR = ".temoignages a"

# Sidebar blocks carry no labels; the site renders them in this order.
SIDEBAR_FIELDS = [
    (0, "observationAt"),
    (1, "region"),
    (2, "department"),
    (3, "classification"),
    (4, "modifiedAt"),
    (5, "typeEvent"),
    (6, "strange"),
    (7, "consistance"),
]
SIDEBAR_EXPECTED = len(SIDEBAR_FIELDS)
SIDEBAR_NUMERIC = {"strange", "consistance"}

# item field -> drupal field machine name on the testimony page
TESTIMONY_FIELDS = {
    "observationAt": "field-date-d-observation-tem",
    "age": "field-age-wysiwyg",
    "gender": "field-genre-wysiwyg",
    "environment": "field-env-sol-wysiwyg",
    "localTime": "field-date-heure-locale-wysiwyg",
    "environment2": "field-cadre-ref-wysiwyg",
    "distanceEventWitness": "field-distance-temoin-wysiwyg",
}
LOCATION_FIELDS = {
    "observationType": "field-nature-wysiwyg",
    "specificityObservation": "field-caracteristique-wysiwyg",
    "shape": "field-forme-wysiwyg",
    "color": "field-couleur-wysiwyg",
    "size": "field-taille-wysiwyg",
    "numberEvent": "field-nombre-phenomene-wysiwyg",
}


def listing_url(page: int):
    return f"{LISTING_URL}page={page}"


def field_selector(machine_name: str):
    return f".field--name-{machine_name} .field__item"


def extract_listing_links(response):
    links = []
    for href in response.css(CASE_LINK_SELECTOR).xpath("@href").getall():
        if SEARCH_LINK_MARKER in href:
            continue
        links.append(f"{BASE_URL}{href}")
    return links


def _collect_links(response, selector):
    out = []
    for a in response.css(selector):
        out.append(DocumentLink(
            name=first_text([a]),
            link=a.attrib.get("href"),
        ))
    return out


def extract_attached_links(response):
    return _collect_links(response, DOCUMENTS_SELECTOR)


def extract_testimony_links(response):
    return _collect_links(response, TESTIMONIES_SELECTOR)


def split_testimony_links(links):
    """Partition testimony-container links into (testimony pages, plain documents)."""
    pages, files = [], []
    for entry in links:
        if contains(entry.get("link"), TESTIMONY_LINK_MARKER):
            pages.append(entry)
        else:
            files.append(entry)
    return pages, files


def sidebar_block_count(response):
    return len(response.css(SIDEBAR_SELECTOR))


def extract_sidebar(response):
    blocks = all_texts(response.css(SIDEBAR_SELECTOR))
    if len(blocks) != SIDEBAR_EXPECTED:
        logger.warning(
            "Sidebar of %s has %d blocks, expected %d; fields may be shifted",
            response.url, len(blocks), SIDEBAR_EXPECTED,
        )
    fields = {}
    for index, name in SIDEBAR_FIELDS:
        raw = blocks[index] if index < len(blocks) else None
        fields[name] = parse_float_or_zero(raw) if name in SIDEBAR_NUMERIC else raw
    return fields


def extract_case(response, url=None):
    """Build a case from its detail page.

    Returns the case and the testimony-page links that still have to be
    fetched. ``testimonials`` starts empty; the spider builds the final case
    once those pages are in. ``url`` is the link that was requested, which
    names the case even when the site redirected it.
    """
    sidebar = extract_sidebar(response)
    testimony_pages, testimony_files = split_testimony_links(extract_testimony_links(response))

    case = CaseItem(
        geipan_id=last_segment(url or response.url),
        title=first_text(response.css(TITLE_SELECTOR)),
        shortDescription=first_text(response.css(SHORT_DESCRIPTION_SELECTOR)),
        description=first_text(response.css(DESCRIPTION_SELECTOR)),
        documents=extract_attached_links(response) + testimony_files,
        testimonials=[],
        **sidebar,
    )
    return case, testimony_pages


def extract_testimony(response, url=None):
    fields = {name: first_text(response.css(field_selector(machine)))
              for name, machine in TESTIMONY_FIELDS.items()}
    location = LocationItem(**{
        name: first_text(response.css(field_selector(machine)))
        for name, machine in LOCATION_FIELDS.items()
    })
    fields["age"] = parse_int_or_nan(fields["age"])

    return TestimonyItem(
        geipan_id=last_segment(url or response.url),
        cas_title=first_text(response.css(TITLE_SELECTOR)),
        location=location,
        **fields,
    )
