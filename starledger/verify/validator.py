# starledger/verify/validator.py
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from starledger.chain.blockchain import Blockchain
from starledger.core.types import Block

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    INVALID_ENTRY_INTEGRITY = "invalid_entry_integrity"
    BROKEN_LINKAGE = "broken_linkage"
    MISSING_PREDECESSOR = "missing_predecessor"
    HEIGHT_MISMATCH = "height_mismatch"


@dataclass
class ValidationFailure:
    height: int
    kind: FailureKind
    message: str


@dataclass
class ValidationResult:
    is_valid: bool
    message: str = ""
    failures: List[ValidationFailure] = field(default_factory=list)

    @property
    def first_failure(self) -> Optional[ValidationFailure]:
        return self.failures[0] if self.failures else None

    def heights_for(self, kind: FailureKind) -> List[int]:
        return [f.height for f in self.failures if f.kind == kind]

    def __bool__(self):
        return self.is_valid

    def __str__(self):
        if self.is_valid:
            return "Chain is valid ✓"
        lines = [f"Validation FAILED ({len(self.failures)} issues):"]
        for f in self.failures:
            lines.append(f"  • [{f.height}] {f.kind.value}: {f.message}")
        return "\n".join(lines)


class ChainValidator:
    """
    Full-scan integrity checker. Collects every violation instead of stopping
    at the first one; only an exception from Block.validate aborts the scan.
    """

    def verify(self, blocks: Sequence[Optional[Block]]) -> ValidationResult:
        """Check an arbitrary sequence of blocks (index == expected height)."""
        failures: List[ValidationFailure] = []

        def fail(height: int, kind: FailureKind, message: str) -> None:
            failures.append(ValidationFailure(height, kind, message))

        for i, block in enumerate(blocks):
            if block is None:
                # reported against the next block, see MISSING_PREDECESSOR
                continue

            if not block.validate():
                fail(i, FailureKind.INVALID_ENTRY_INTEGRITY, "Block hash does not match its content")

            if block.height != i:
                fail(i, FailureKind.HEIGHT_MISMATCH, f"Height mismatch: expected {i}, got {block.height}")

            previous = blocks[i - 1] if i > 0 else None
            if previous is None:
                if block.previous_block_hash is not None:
                    fail(i, FailureKind.MISSING_PREDECESSOR,
                         "previous_block_hash is set but there is no predecessor")
            elif previous.compute_hash() != block.previous_block_hash:
                fail(i, FailureKind.BROKEN_LINKAGE, "previous_block_hash does not match previous block hash")

        if failures:
            return ValidationResult(False, f"Failed with {len(failures)} issues", failures)
        return ValidationResult(True, "Valid chain")

    def validate(self, chain: Blockchain) -> ValidationResult:
        """Scan a live chain while holding its writer lock."""
        with chain.locked() as blocks:
            result = self.verify(blocks)
        if result.is_valid:
            logger.info("Chain validated: %d blocks", len(blocks))
        else:
            logger.warning("Chain validation found %d issues", len(result.failures))
        return result
