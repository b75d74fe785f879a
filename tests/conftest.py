"""Shared fixtures: self-signed certificates built with ``cryptography``.

Certificates are deterministic apart from the key material: fixed
validity window, caller-chosen serial, subject and SANs.
"""

from __future__ import annotations

import base64
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509.oid import NameOID

NOT_BEFORE = datetime(2024, 1, 1, tzinfo=UTC)
NOT_AFTER = datetime(2025, 1, 1, tzinfo=UTC)

CertFactory = Callable[..., x509.Certificate]


@pytest.fixture(scope="session")
def signing_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def make_certificate(signing_key: ec.EllipticCurvePrivateKey) -> CertFactory:
    """Return a factory for self-signed certificates."""

    def _make(
        common_name: str = "example.com",
        serial: int = 0x1001,
        dns_names: Sequence[str] = (),
        not_after: datetime = NOT_AFTER,
        key: ec.EllipticCurvePrivateKey | None = None,
    ) -> x509.Certificate:
        private_key = key or signing_key
        name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
        builder = (
            x509.CertificateBuilder()
            .subject_name(name)
            .issuer_name(name)
            .public_key(private_key.public_key())
            .serial_number(serial)
            .not_valid_before(NOT_BEFORE)
            .not_valid_after(not_after)
        )
        if dns_names:
            builder = builder.add_extension(
                x509.SubjectAlternativeName([x509.DNSName(n) for n in dns_names]),
                critical=False,
            )
        return builder.sign(private_key, hashes.SHA256())

    return _make


@pytest.fixture
def certificate(make_certificate: CertFactory) -> x509.Certificate:
    return make_certificate(dns_names=("example.com", "www.example.com"))


@pytest.fixture
def certificate_pem(certificate: x509.Certificate) -> str:
    return certificate.public_bytes(Encoding.PEM).decode("ascii")


@pytest.fixture
def certificate_base64_pem(certificate_pem: str) -> str:
    return base64.b64encode(certificate_pem.encode("ascii")).decode("ascii")


@pytest.fixture
def certificate_base64_der(certificate: x509.Certificate) -> str:
    return base64.b64encode(certificate.public_bytes(Encoding.DER)).decode("ascii")


@pytest.fixture
def to_pem() -> Callable[[x509.Certificate], str]:
    def _encode(cert: x509.Certificate) -> str:
        return cert.public_bytes(Encoding.PEM).decode("ascii")

    return _encode
