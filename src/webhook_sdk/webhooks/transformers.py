"""
Signature transformers

A signature transformer reduces a provider-specific signature header to the
single signature string a verifier expects. Pass one as
VerifyOptions.signature_transformer.
"""

from ..exceptions import WebhookVerificationError
from ..verifiers.types import SignatureTransformer


def versioned_signature_transformer(version: str = "v1") -> SignatureTransformer:
    """
    Pick one signature out of a space-separated list of "<version>,<signature>" pairs.

    Svix-style providers send e.g. "v1,abc= v2,def=" and the first entry
    with the requested version is returned.
    """
    def transform(header_value: str) -> str:
        for entry in (header_value or '').split():
            entry_version, separator, signature = entry.partition(',')
            if separator and entry_version == version:
                return signature
        raise WebhookVerificationError.with_detail(f"no {version} signature in header")

    return transform


def prefix_stripping_transformer(prefix: str) -> SignatureTransformer:
    """Strip a fixed prefix such as "v0=" from the header value"""
    def transform(header_value: str) -> str:
        if header_value and header_value.startswith(prefix):
            return header_value[len(prefix):]
        return header_value

    return transform
