"""Works out how to extract the file type field from a mode word.

A value is a simple mask if it contains a single run of 1 bits.  A word can
be seen as partitioned into fields, each extracted by one shift and one mask.
Anything more complicated would be several fields to extract and concatenate,
and a single lookup table cannot be indexed by that.
"""
import logging
from typing import Final, NamedTuple


LOGGER: Final = logging.getLogger(__name__)


class MaskShapeError(ValueError):
    """The type mask is not a single contiguous run of 1 bits."""

    def __init__(self, mask: int, reason: str):
        super().__init__(f"S_IFMT = {mask:#x}: {reason}")
        self.mask = mask
        self.reason = reason


class MaskLayout(NamedTuple):
    """Where the type field sits within a mode word."""
    mask: int
    shift: int
    effective_mask: int

    @property
    def table_size(self) -> int:
        return self.effective_mask + 1


def is_power_of_2(n: int) -> bool:
    return (n & (n - 1)) == 0


def is_simple_mask(msk: int) -> bool:
    """True if ``msk``, already shifted down to bit 0, is all 1s."""
    return is_power_of_2(msk + 1)


def analyze_mask(mask: int) -> MaskLayout:
    """Derive the shift and effective mask for ``mask``.

    Raises:
        MaskShapeError: if ``mask`` has no set bits or more than one run of them.
    """
    if mask <= 0:
        raise MaskShapeError(mask, "it must have at least one bit set.")
    msk = mask
    shift = 0
    while (msk & 1) == 0:
        msk >>= 1
        shift += 1

    if not is_simple_mask(msk):
        raise MaskShapeError(
            mask, "it must be a simple mask, that is, a single run of 1 bits.")

    LOGGER.debug("analyze_mask: %#x -> shift %d, mask %#x", mask, shift, msk)
    return MaskLayout(mask=mask, shift=shift, effective_mask=msk)
