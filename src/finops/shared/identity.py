"""Heuristic check that a company name plausibly owns a website URL.

Advisory only: a ``False`` result means "ask the user", not "reject".
"""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NON_ALNUM_OR_SPACE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_LEGAL_SUFFIX = re.compile(r"(inc|corp|corporation|llc|ltd|limited|company|co)$")
_SCHEME = re.compile(r"^https?://")
_WWW = re.compile(r"^www\.")

# Partial and per-word matches below this length are too noisy to trust.
_MIN_FRAGMENT = 3
_MIN_ACRONYM = 2


def normalize_company_name(company_name: str) -> str:
    """``"Acme Corp."`` -> ``"acme"``."""
    name = _NON_ALNUM_OR_SPACE.sub("", company_name.lower())
    name = _WHITESPACE.sub("", name)
    return _LEGAL_SUFFIX.sub("", name)


def normalize_url_label(website_url: str) -> str:
    """``"https://www.cloudzero.com/pricing"`` -> ``"cloudzero"``."""
    url = _SCHEME.sub("", website_url.lower())
    url = _WWW.sub("", url)
    return _NON_ALNUM.sub("", url.split(".")[0])


def matches(company_name: str, website_url: str) -> bool:
    """Return True if ``company_name`` plausibly corresponds to ``website_url``.

    Validation is skipped (True) when either input is blank. Otherwise a
    match is any of: equal normalized forms, one containing the other,
    a significant word of the name inside the domain label, or the name's
    acronym inside the domain label.
    """
    if not company_name.strip() or not website_url.strip():
        return True

    clean_name = normalize_company_name(company_name)
    label = normalize_url_label(website_url)

    if clean_name == label:
        return True

    if len(clean_name) >= _MIN_FRAGMENT and len(label) >= _MIN_FRAGMENT:
        if clean_name in label or label in clean_name:
            return True

    words = _WHITESPACE.split(company_name.lower().strip())
    for word in words:
        clean_word = _NON_ALNUM.sub("", word)
        if len(clean_word) >= _MIN_FRAGMENT and clean_word in label:
            return True

    if len(words) > 1:
        acronym = "".join(word[0] for word in words if word)
        if len(acronym) >= _MIN_ACRONYM and acronym in label:
            return True

    return False


def mismatch_warning(company_name: str, website_url: str) -> str:
    return (
        f'The company name "{company_name}" doesn\'t seem to match the website URL '
        f'"{website_url}". This might lead to inaccurate recommendations.'
    )
