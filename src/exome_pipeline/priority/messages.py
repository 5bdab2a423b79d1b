"""Report text for priorities, kept apart from the scoring logic."""

from typing import Iterable


OMIM_URL_TEMPLATE = "http://omim.org/{}"
ORPHANET_URL_TEMPLATE = "http://www.orpha.net/consor/cgi-bin/OC_Exp.php?lng=en&Expert={}"
ORPHANET_MARKER = "ORPHANET"

PHENODIGM_TITLE = "Mouse PhenoDigm Filter for OMIM"


def disease_url(disease_id: str) -> str:
    """Link target for a disease: Orphanet for ORPHANET ids, OMIM otherwise."""
    if ORPHANET_MARKER in disease_id:
        suffix = disease_id.split(":")[1] if ":" in disease_id else disease_id
        return ORPHANET_URL_TEMPLATE.format(suffix)
    return OMIM_URL_TEMPLATE.format(disease_id)


def phenodigm_title_message() -> str:
    return PHENODIGM_TITLE


def phenodigm_anchor_message(disease_id: str) -> str:
    url = disease_url(disease_id)
    return (
        "Mouse phenotypes for candidate genes were compared to "
        f'<a href="{url}">{disease_id}</a>\n'
    )


def summary_message(gene_count: int, label: str) -> str:
    return f"Data analysed for {gene_count} genes using {label}"


def messages_to_html(messages: Iterable[str]) -> str:
    """Wrap each message in <li> and the sequence in <ul>; text is not escaped."""
    parts = ["<ul>\n"]
    parts.extend(f"<li>{message}</li>\n" for message in messages)
    parts.append("</ul>\n")
    return "".join(parts)
