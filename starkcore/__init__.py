"""starkcore - algebraic and cryptographic building blocks for STARK proofs."""

from starkcore.batch_inverse import batch_inverse
from starkcore.channel import (
    INITIAL_STATE,
    STATE_HEX_DIGITS,
    Channel,
    ChannelConfig,
)
from starkcore.errors import (
    DivisionByZeroError,
    DuplicatePointsError,
    InvariantViolationError,
    InverseUndefinedError,
    LengthMismatchError,
    NotExactlyDivisibleError,
    StarkCoreError,
)
from starkcore.field import (
    FF,
    GENERATOR_VALUE,
    PRIME,
    TWO_ADICITY,
    FieldElement,
    coset,
    from_ff,
    generator_of_order,
    subgroup,
    to_ff,
)
from starkcore.hashing import serialize, sha256_hex
from starkcore.merkle_tree import (
    InternalFact,
    LeafFact,
    MerkleTree,
    verify_decommitment,
)
from starkcore.polynomial import (
    Polynomial,
    interpolate_poly,
    lagrange_basis,
    prod,
)

__version__ = "0.1.0"
__all__ = [
    # Field
    "FF",
    "PRIME",
    "TWO_ADICITY",
    "GENERATOR_VALUE",
    "FieldElement",
    "generator_of_order",
    "subgroup",
    "coset",
    "to_ff",
    "from_ff",
    "batch_inverse",
    # Polynomial
    "Polynomial",
    "prod",
    "lagrange_basis",
    "interpolate_poly",
    # Hashing
    "sha256_hex",
    "serialize",
    # Merkle Tree
    "MerkleTree",
    "LeafFact",
    "InternalFact",
    "verify_decommitment",
    # Channel
    "Channel",
    "ChannelConfig",
    "INITIAL_STATE",
    "STATE_HEX_DIGITS",
    # Errors
    "StarkCoreError",
    "InverseUndefinedError",
    "DivisionByZeroError",
    "NotExactlyDivisibleError",
    "LengthMismatchError",
    "DuplicatePointsError",
    "InvariantViolationError",
]
