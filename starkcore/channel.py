"""
Fiat-Shamir channel.

Simulates the verifier of an interactive proof: every "random" challenge is
a hash of everything the prover has sent so far, so the prover cannot pick
a commitment after seeing the challenge it implies.

State transitions:
    send(data):     state <- truncate(sha256(state + data))
    draw_int(...):  value <- min + int(state, 16) mod (max - min + 1)
                    state <- truncate(sha256(state))

truncate() keeps the first STATE_HEX_DIGITS hex characters of the digest.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from starkcore.field import PRIME, FieldElement
from starkcore.hashing import DIGEST_HEX_LENGTH, sha256_hex

logger = logging.getLogger(__name__)

INITIAL_STATE = "0"
STATE_HEX_DIGITS = 32  # 128 bits of state


@dataclass(frozen=True)
class ChannelConfig:
    """Channel parameters."""
    initial_state: str = INITIAL_STATE
    state_hex_digits: int = STATE_HEX_DIGITS

    def __post_init__(self) -> None:
        if not 1 <= self.state_hex_digits <= DIGEST_HEX_LENGTH:
            raise ValueError(
                f"state_hex_digits must be in [1, {DIGEST_HEX_LENGTH}], got {self.state_hex_digits}"
            )


class Channel:
    """
    Fiat-Shamir transcript owned by a single prover.

    Attributes:
        state: Current hex digest state
        transcript: Flat concatenation of everything sent and every revealed draw
    """

    def __init__(self, config: Optional[ChannelConfig] = None) -> None:
        self.config = config or ChannelConfig()
        self.state = self.config.initial_state
        self.transcript = ""

    def _advance(self, data: str) -> None:
        self.state = sha256_hex(data)[:self.config.state_hex_digits]

    def send(self, data: str) -> None:
        """Commit data (e.g. a Merkle root) to the transcript and fold it into the state."""
        self.transcript += data
        self._advance(self.state + data)
        logger.debug(f"channel send {data!r}, state {self.state}")

    def draw_int(self, min_value: int, max_value: int, reveal: bool = True) -> int:
        """Draw a pseudorandom integer in [min_value, max_value] from the current state.

        Args:
            min_value: Smallest value that may be drawn
            max_value: Largest value that may be drawn (inclusive)
            reveal: Append the drawn value to the transcript

        Returns:
            The drawn integer
        """
        if min_value > max_value:
            raise ValueError(f"Empty range [{min_value}, {max_value}]")

        value = min_value + int(self.state, 16) % (max_value - min_value + 1)
        self._advance(self.state)
        if reveal:
            self.transcript += str(value)
        logger.debug(f"channel draw {value} in [{min_value}, {max_value}]")
        return value

    def draw_field_element(self, reveal: bool = True) -> FieldElement:
        """Draw a pseudorandom field element; reveal has the same meaning as in draw_int."""
        return FieldElement(self.draw_int(0, PRIME - 1, reveal))
