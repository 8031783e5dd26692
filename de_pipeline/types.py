# de_pipeline/types.py

import re
from dataclasses import dataclass
from typing import List

import pandas as pd

PACKAGES = ("DESeq2", "edgeR", "limma")

# R variable name without "_", which separates the factor from the levels
FACTOR_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9.]*$")


@dataclass
class Contrast:
    factor: str
    numerator: str
    denominator: str

    def __post_init__(self):
        if not FACTOR_NAME.match(self.factor):
            raise ValueError(
                f"Factor name '{self.factor}' must start with a letter and contain only letters, digits or '.'"
            )

    @classmethod
    def from_condition_name(cls, condition_name: str) -> "Contrast":
        """Parse a comparison name such as ``condition_day4_vs_day7``."""
        factor, sep, rest = condition_name.partition("_")
        numerator, vs, denominator = rest.partition("_vs_")
        if not sep or not vs or not factor or not numerator or not denominator:
            raise ValueError(
                f"Could not parse comparison '{condition_name}', expected '<factor>_<a>_vs_<b>'"
            )
        return cls(factor=factor, numerator=numerator, denominator=denominator)

    @property
    def levels(self) -> List[str]:
        # reference level first
        return [self.denominator, self.numerator]

    @property
    def condition_name(self) -> str:
        return f"{self.factor}_{self.numerator}_vs_{self.denominator}"


@dataclass
class DEResults:
    deseq: pd.DataFrame
    edger: pd.DataFrame
    limma: pd.DataFrame
    contrast: Contrast

    def as_dict(self) -> dict[str, pd.DataFrame]:
        return dict(zip(PACKAGES, (self.deseq, self.edger, self.limma)))
