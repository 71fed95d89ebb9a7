from dataclasses import dataclass

from rangecut.util import OPEN_END


@dataclass(frozen=True, kw_only=True)
class Interval:
    left: int
    right: int

    def __post_init__(self) -> None:
        if self.right < self.left:
            raise ValueError(
                f"Decreasing range {self.left}-{self.right}: "
                f"position {self.right} comes before {self.left}"
            )

    @property
    def open_ended(self) -> bool:
        return self.right == OPEN_END

    def __str__(self) -> str:
        """Render in range-list syntax: ``3``, ``3-7`` or ``8-``."""
        if self.open_ended:
            return f"{self.left}-"
        if self.left == self.right:
            return str(self.left)
        return f"{self.left}-{self.right}"
