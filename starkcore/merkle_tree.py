"""Binary Merkle tree commitment over field elements using SHA-256."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from starkcore.field import FieldElement
from starkcore.hashing import sha256_hex

logger = logging.getLogger(__name__)

# --- Type Aliases ---

MerkleRoot = str
AuthenticationPath = List[str]


# --- Data Classes ---

@dataclass(frozen=True)
class LeafFact:
    """Fact table entry for a leaf digest."""
    value: FieldElement


@dataclass(frozen=True)
class InternalFact:
    """Fact table entry for an internal node digest: its two child digests."""
    left: str
    right: str


Fact = Union[LeafFact, InternalFact]


# --- Merkle Tree ---

class MerkleTree:
    """Binary Merkle tree with 1-indexed heap addressing.

    Node 1 is the root, node k has children 2k and 2k+1, and the padded
    leaves occupy node ids [n_leaves, 2 * n_leaves). Digests live in a flat
    arena indexed by node id. The padded leaves are held in a tuple so the
    committed sequence cannot change after build().

    Leaf digest:     sha256(decimal string of the field element)
    Internal digest: sha256(left_hex + right_hex)
    """

    def __init__(self, data: Sequence[FieldElement]) -> None:
        if len(data) == 0:
            raise ValueError("Cannot construct a Merkle tree over no leaves")

        self.n_leaves = 1 << (len(data) - 1).bit_length()
        self.height = self.n_leaves.bit_length() - 1
        self.data: Tuple[FieldElement, ...] = tuple(data) + (FieldElement.zero(),) * (self.n_leaves - len(data))

        self._nodes: List[Optional[str]] = [None] * (2 * self.n_leaves)

    # --- Core Operations ---

    def build(self) -> MerkleRoot:
        """Hash every node bottom-up and return the root digest.

        Rebuilding recomputes identical digests, so repeated calls are harmless.
        """
        n = self.n_leaves
        for i, value in enumerate(self.data):
            self._nodes[n + i] = sha256_hex(str(value))
        for node_id in range(n - 1, 0, -1):
            self._nodes[node_id] = sha256_hex(self._nodes[2 * node_id] + self._nodes[2 * node_id + 1])

        logger.debug(f"built Merkle tree over {n} leaves, height {self.height}, root {self._nodes[1]}")
        return self._nodes[1]

    @property
    def root(self) -> Optional[MerkleRoot]:
        """Root digest, or None before build()."""
        return self._nodes[1]

    @property
    def is_built(self) -> bool:
        return self._nodes[1] is not None

    @property
    def facts(self) -> Dict[str, Fact]:
        """Map every digest in the tree to the node it commits to."""
        self._require_built()
        n = self.n_leaves
        table: Dict[str, Fact] = {}
        for node_id in range(1, n):
            table[self._nodes[node_id]] = InternalFact(self._nodes[2 * node_id], self._nodes[2 * node_id + 1])
        for i, value in enumerate(self.data):
            table[self._nodes[n + i]] = LeafFact(value)
        return table

    def node(self, node_id: int) -> str:
        """Digest stored at a heap node id."""
        self._require_built()
        if not 1 <= node_id < 2 * self.n_leaves:
            raise ValueError(f"Node id {node_id} out of range [1, {2 * self.n_leaves})")
        return self._nodes[node_id]

    def get_authentication_path(self, leaf_id: int) -> AuthenticationPath:
        """Sibling digests from the leaf level up to the children of the root.

        The path has exactly `height` entries.
        """
        self._require_built()
        if not 0 <= leaf_id < self.n_leaves:
            raise ValueError(f"Leaf index {leaf_id} out of range [0, {self.n_leaves})")

        path = []
        node_id = leaf_id + self.n_leaves
        while node_id > 1:
            path.append(self._nodes[node_id ^ 1])
            node_id >>= 1
        return path

    # --- Internal Helpers ---

    def _require_built(self) -> None:
        if not self.is_built:
            raise ValueError("Merkle tree not built. Call build() first.")


def verify_decommitment(
    leaf_id: int,
    leaf_value: FieldElement,
    path: AuthenticationPath,
    root: MerkleRoot,
) -> bool:
    """Check that leaf_value sits at leaf_id under root, given its authentication path."""
    n_leaves = 1 << len(path)
    if not 0 <= leaf_id < n_leaves:
        return False

    node_id = leaf_id + n_leaves
    current = sha256_hex(str(leaf_value))
    for sibling in path:
        if node_id & 1:
            current = sha256_hex(sibling + current)
        else:
            current = sha256_hex(current + sibling)
        node_id >>= 1
    return current == root
