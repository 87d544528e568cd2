from __future__ import annotations

from scrapy.http import HtmlResponse

from geipan.extract import BASE_URL

SIDEBAR = ["2020-01-01", "Bretagne", "29", "B", "2021-01-01", "type1", "3.5", "not-a-number"]


def html_response(url: str, body: str, status: int = 200, request=None) -> HtmlResponse:
    return HtmlResponse(url=url, body=body.encode("utf-8"), encoding="utf-8",
                        status=status, request=request)


def listing_html(*hrefs: str) -> str:
    cards = "".join(
        f'<div class="custom-link-to"><a href="{href}">Cas {i}</a></div>' for i, href in enumerate(hrefs)
    )
    return f"<html><body><div class='results'>{cards}</div></body></html>"


EMPTY_LISTING = "<html><body><p>Aucun résultat ne correspond à votre recherche.</p></body></html>"


def case_html(title="Cas de Brest", sidebar=SIDEBAR, documents=(), testimonies=(),
              short="Boule lumineuse", description="Long <b>récit</b> du témoin") -> str:
    blocks = "".join(
        f'<div class="one_info"><span class="label">x</span><div class="one_info-data"> {b} </div></div>'
        for b in sidebar
    )
    docs = "".join(f'<a href="{href}"> {name} </a>' for name, href in documents)
    tems = "".join(f'<a href="{href}"> {name} </a>' for name, href in testimonies)
    parts = [f'<div class="cas__title"><h2>  {title}  </h2></div>'] if title is not None else []
    if short is not None:
        parts.append(f'<div class="cas__chapo"><div class="field-value"> {short} </div></div>')
    if description is not None:
        parts.append(f'<div class="cas__body"><div class="field-value">{description}</div></div>')
    parts.append(f'<aside class="sidebar-bloc">{blocks}</aside>')
    parts.append(f'<div class="documents">{docs}</div>')
    parts.append(f'<div class="temoignages">{tems}</div>')
    return "<html><body>" + "".join(parts) + "</body></html>"


def testimony_html(title="Cas de Brest", **fields: str) -> str:
    items = "".join(
        f'<div class="field field--name-{name}"><div class="field__label">l</div>'
        f'<div class="field__item"> {value} </div></div>'
        for name, value in fields.items()
    )
    return f'<html><body><div class="cas__title"><h2>{title}</h2></div>{items}</body></html>'


FULL_TESTIMONY = {
    "field-date-d-observation-tem": "12/03/2020",
    "field-age-wysiwyg": "42 ans",
    "field-genre-wysiwyg": "H",
    "field-env-sol-wysiwyg": "Campagne",
    "field-date-heure-locale-wysiwyg": "21:30",
    "field-cadre-ref-wysiwyg": "Ciel dégagé",
    "field-distance-temoin-wysiwyg": "500 m",
    "field-nature-wysiwyg": "Visuelle",
    "field-caracteristique-wysiwyg": "Fixe",
    "field-forme-wysiwyg": "Ronde",
    "field-couleur-wysiwyg": "Orange",
    "field-taille-wysiwyg": "Pièce de monnaie",
    "field-nombre-phenomene-wysiwyg": "1",
}


def case_url(case_id: str) -> str:
    return f"{BASE_URL}/fr/cas/{case_id}"


def run_callback(request, body: str, status: int = 200) -> list:
    response = html_response(request.url, body, status=status, request=request)
    return list(request.callback(response, **request.cb_kwargs) or [])
