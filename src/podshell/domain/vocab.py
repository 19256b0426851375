"""RDF vocabulary constants and the class-name alias table.

Short aliases such as ``vcard:Individual`` map to full class IRIs. Anything
already starting with ``http://`` or ``https://`` is treated as qualified.
"""

from __future__ import annotations

from podshell.domain.errors import UnknownClassError

FOAF_NS = "http://xmlns.com/foaf/0.1/"
VCARD_NS = "http://www.w3.org/2006/vcard/ns#"
ORG_NS = "http://www.w3.org/ns/org#"
SCHEMA_NS = "https://schema.org/"
LDP_NS = "http://www.w3.org/ns/ldp#"
SOLID_NS = "http://www.w3.org/ns/solid/terms#"

COMMON_TYPES: dict[str, str] = {
    # Contacts
    "vcard:Individual": f"{VCARD_NS}Individual",
    "vcard:Group": f"{VCARD_NS}Group",
    "vcard:Organization": f"{VCARD_NS}Organization",
    # FOAF
    "foaf:Person": f"{FOAF_NS}Person",
    "foaf:Group": f"{FOAF_NS}Group",
    # Organization
    "org:Organization": f"{ORG_NS}Organization",
    "org:OrganizationalUnit": f"{ORG_NS}OrganizationalUnit",
    # Schema.org
    "schema:Person": f"{SCHEMA_NS}Person",
    "schema:Organization": f"{SCHEMA_NS}Organization",
    "schema:SoftwareApplication": f"{SCHEMA_NS}SoftwareApplication",
    # LDP
    "ldp:Resource": f"{LDP_NS}Resource",
    "ldp:Container": f"{LDP_NS}Container",
}

_QUALIFIED_PREFIXES = ("http://", "https://")


def is_qualified_iri(value: str) -> bool:
    return value.startswith(_QUALIFIED_PREFIXES)


def resolve_class_iri(name_or_iri: str) -> str:
    """Resolve a short class alias to its full IRI.

    Raises:
        UnknownClassError: If *name_or_iri* is neither qualified nor a
            known alias.
    """
    if is_qualified_iri(name_or_iri):
        return name_or_iri
    iri = COMMON_TYPES.get(name_or_iri)
    if iri is None:
        raise UnknownClassError(name_or_iri)
    return iri


def class_display_name(class_iri: str) -> str:
    """Friendly name for a class IRI: its alias, else the IRI's local name."""
    for alias, iri in COMMON_TYPES.items():
        if iri == class_iri:
            return alias
    cut = max(class_iri.rfind("#"), class_iri.rfind("/"))
    if cut != -1:
        return class_iri[cut + 1 :]
    return class_iri


def common_type_names() -> list[str]:
    """Aliases accepted by :func:`resolve_class_iri`, in table order."""
    return list(COMMON_TYPES)
