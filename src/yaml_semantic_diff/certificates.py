"""CertificateInspector: decode X.509 certificates embedded in YAML strings.

Kubernetes Secrets and TLS configs often carry certificates as PEM text or
as base64 of PEM/DER.  Comparing those strings character by character is
useless to a reviewer, so the diff engine asks this inspector to turn each
side into a small synthetic mapping of human-meaningful fields, and diffs
those instead.

Accepted inputs:

- a single PEM ``CERTIFICATE`` block (surrounding whitespace allowed);
  chains of several blocks are rejected
- base64 text that decodes to such a PEM block, or to DER bytes

Every decode failure is local: the inspector returns ``None`` and the
engine falls back to plain string comparison.  Results, including
failures, are memoised per inspector instance in a ``cachetools.LRUCache``.

Example::

    inspector = CertificateInspector()
    fields = inspector.fields(pem_text)
    if fields is not None:
        fields.entries["subject"]   # ScalarNode("CN=example.com")
"""

from __future__ import annotations

import base64
import hashlib
import re

from cachetools import LRUCache
from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from cryptography.x509.oid import NameOID

from yaml_semantic_diff.observability import get_logger
from yaml_semantic_diff.tree.nodes import MappingNode, Node, ScalarKind, ScalarNode, SequenceNode
from yaml_semantic_diff.tree.ordered_mapping import OrderedMapping

__all__ = ["CertificateInspector", "format_certificate", "is_pem_certificate"]

log = get_logger("certificates")

PEM_HEADER = "-----BEGIN CERTIFICATE-----"

# Shortest base64 worth trying: a minimal DER certificate is well above this.
_MIN_BASE64_LENGTH = 100
_BASE64_RE = re.compile(r"^[A-Za-z0-9+/=\s]+$")


def _load_pem(text: str) -> x509.Certificate | None:
    trimmed = text.strip()
    if not trimmed.startswith(PEM_HEADER):
        return None
    if trimmed.count(PEM_HEADER) > 1:
        return None
    try:
        return x509.load_pem_x509_certificate(trimmed.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        return None


def _load_base64(text: str) -> x509.Certificate | None:
    compact = "".join(text.split())
    if len(compact) < _MIN_BASE64_LENGTH or not _BASE64_RE.match(text):
        return None
    try:
        decoded = base64.b64decode(compact, validate=True)
    except ValueError:
        return None
    if decoded.startswith(PEM_HEADER.encode("ascii")):
        return _load_pem(decoded.decode("ascii", errors="replace"))
    if decoded[:1] == b"\x30":
        try:
            return x509.load_der_x509_certificate(decoded)
        except ValueError:
            return None
    return None


def is_pem_certificate(text: str) -> bool:
    """Return True when ``text`` is exactly one valid PEM certificate."""
    return _load_pem(text) is not None


def _common_name(name: x509.Name) -> str:
    attrs = name.get_attributes_for_oid(NameOID.COMMON_NAME)
    if attrs:
        return str(attrs[0].value)
    orgs = name.get_attributes_for_oid(NameOID.ORGANIZATION_NAME)
    if orgs:
        return str(orgs[0].value)
    return ""


def _subject_alt_names(cert: x509.Certificate) -> list[str]:
    try:
        ext = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return []
    names: list[str] = []
    for general_name in ext.value:
        if isinstance(general_name, x509.DNSName):
            names.append(f"DNS:{general_name.value}")
        elif isinstance(general_name, x509.IPAddress):
            names.append(f"IP:{general_name.value}")
        elif isinstance(general_name, x509.RFC822Name):
            names.append(f"email:{general_name.value}")
        elif isinstance(general_name, x509.UniformResourceIdentifier):
            names.append(f"URI:{general_name.value}")
        else:
            names.append(str(general_name.value))
    return names


def _public_key_fingerprint(cert: x509.Certificate) -> str:
    try:
        spki = cert.public_key().public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)
    except (UnsupportedAlgorithm, ValueError):
        return ""
    return hashlib.sha256(spki).hexdigest()


def _text(value: str) -> ScalarNode:
    return ScalarNode(value=value, kind=ScalarKind.STRING, raw=value)


def format_certificate(cert: x509.Certificate) -> str:
    """Return a one-line human summary of ``cert``."""
    subject = _common_name(cert.subject)
    if not subject:
        sans = _subject_alt_names(cert)
        subject = sans[0].partition(":")[2] if sans else ""
    return (
        f"Certificate(CN={subject}, Issuer={_common_name(cert.issuer)}, "
        f"Valid={cert.not_valid_before_utc:%Y-%m-%d}..{cert.not_valid_after_utc:%Y-%m-%d}, "
        f"Serial={cert.serial_number:x})"
    )


class CertificateInspector:
    """Decodes certificate strings into comparable field mappings.

    Args:
        max_size: Maximum number of decoded strings to memoise.  The least
            recently used entry is silently evicted when exceeded.
    """

    def __init__(self, max_size: int = 256) -> None:
        self._cache: LRUCache[str, x509.Certificate | None] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def decode(self, text: str) -> x509.Certificate | None:
        """Return the certificate held in ``text``, or ``None``."""
        if text in self._cache:
            return self._cache[text]
        cert = _load_pem(text)
        if cert is None and PEM_HEADER not in text:
            cert = _load_base64(text)
        self._cache[text] = cert
        if cert is not None:
            log.debug("certificate_decoded", serial=f"{cert.serial_number:x}")
        return cert

    def fields(self, text: str) -> MappingNode | None:
        """Return the synthetic field mapping for ``text``, or ``None``.

        Fields, in order: ``subject``, ``issuer``, ``serialNumber``,
        ``notBefore``, ``notAfter``, ``subjectAltNames``,
        ``publicKeyFingerprint``.
        """
        cert = self.decode(text)
        if cert is None:
            return None
        not_before = cert.not_valid_before_utc
        not_after = cert.not_valid_after_utc
        entries: OrderedMapping[str, Node] = OrderedMapping()
        entries["subject"] = _text(cert.subject.rfc4514_string())
        entries["issuer"] = _text(cert.issuer.rfc4514_string())
        entries["serialNumber"] = _text(f"{cert.serial_number:x}")
        entries["notBefore"] = ScalarNode(
            value=not_before, kind=ScalarKind.TIMESTAMP, raw=not_before.isoformat()
        )
        entries["notAfter"] = ScalarNode(
            value=not_after, kind=ScalarKind.TIMESTAMP, raw=not_after.isoformat()
        )
        entries["subjectAltNames"] = SequenceNode(
            tuple(_text(name) for name in _subject_alt_names(cert))
        )
        entries["publicKeyFingerprint"] = _text(_public_key_fingerprint(cert))
        return MappingNode(entries)

    def summarize(self, text: str) -> str | None:
        """Return a one-line summary of the certificate in ``text``, or ``None``."""
        cert = self.decode(text)
        return None if cert is None else format_certificate(cert)
