from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Tuple

from wxr2jekyll.config import TaxonomyRule


def classify(declarations: Iterable[Tuple[str, str]], rule: TaxonomyRule) -> Dict[str, List[str]]:
    """
    Group raw ``(domain, term)`` category declarations by domain.

    - Drops every declaration whose domain is in ``rule.excluded_domains``
    - Drops a declaration whose term equals ``rule.entry_filter[domain]``
    - Keeps first-seen order and duplicate terms

    Returns a mapping of domain to its list of terms.
    """
    taxonomies: Dict[str, List[str]] = {}
    for domain, term in declarations:
        if domain in rule.excluded_domains:
            continue
        if rule.entry_filter.get(domain) == term:
            continue
        taxonomies.setdefault(domain, []).append(term)
    return taxonomies


def remap(taxonomies: Mapping[str, List[str]], name_mapping: Mapping[str, str]) -> Dict[str, List[str]]:
    """Rename domains to display names, merging domains that share a name."""
    result: Dict[str, List[str]] = {}
    for domain, terms in taxonomies.items():
        result.setdefault(name_mapping.get(domain, domain), []).extend(terms)
    return result
