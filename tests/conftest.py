"""Shared test fixtures and Hypothesis strategies."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from hypothesis import strategies as st

from typeid import TypeID, factory


# =============================================================================
# Common Type Aliases and Factories
# =============================================================================

UserId = TypeID[Literal["user"]]
OrgId = TypeID[Literal["org"]]
ApiKeyId = TypeID[Literal["api_key"]]

UserIdFactory = factory(UserId)
OrgIdFactory = factory(OrgId)
ApiKeyIdFactory = factory(ApiKeyId)

# Reference pair from the TypeID format's published test vectors
SOME_UUID = UUID("01890a5d-ac96-774b-bcce-b302099a8057")
SOME_SUFFIX = "01h455vb4pex5vsknk084sn02q"


# =============================================================================
# Hypothesis Strategies
# =============================================================================

ALPHABET = "0123456789abcdefghjkmnpqrstvwxyz"

# Strategy for valid prefixes (lowercase, no leading/trailing/consecutive underscores)
prefix_strategy = st.from_regex(r"[a-z]([a-z_]*[a-z])?", fullmatch=True).filter(
    lambda s: "__" not in s and len(s) <= 63
)

# Strategy for prefixes including the empty "untyped" prefix
optional_prefix_strategy = st.one_of(st.just(""), prefix_strategy)

# Strategy for raw 16-byte values
value_strategy = st.binary(min_size=16, max_size=16)

# Strategy for valid 26-char suffixes (leading symbol restricted to 0-7)
suffix_strategy = st.builds(
    lambda head, tail: head + tail,
    st.sampled_from(ALPHABET[:8]),
    st.text(st.sampled_from(ALPHABET), min_size=25, max_size=25),
)
