from helpers.naive_diff import (
    RefKind,
    RefToken,
    NaiveLCS,
    ReferenceGreedy,
    TokenVerifier,
    lcs_length,
    reference_diff,
    ref_signature,
    token_signature,
    verify_tokens,
)


__all__ = [
    "RefKind",
    "RefToken",
    "NaiveLCS",
    "ReferenceGreedy",
    "TokenVerifier",
    "lcs_length",
    "reference_diff",
    "ref_signature",
    "token_signature",
    "verify_tokens",
]
