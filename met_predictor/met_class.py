# met_predictor/met_class.py
"""
The four MET (metabolic-equivalent) activity-intensity classes.

Index order is the contract every model output shares: tensor column i,
label value i and the i-th canonical map key all refer to the same class.
"""

from enum import Enum


class MetClass(Enum):

    SEDENTARY = (0, "Sedentary")
    LIGHT     = (1, "Light")
    MODERATE  = (2, "Moderate")
    VIGOROUS  = (3, "Vigorous")

    def __init__(self, index, label):
        self.index = index
        self.label = label

    def __str__(self):
        return self.label

    @classmethod
    def from_index(cls, index: int) -> "MetClass":
        for member in cls:
            if member.index == index:
                return member
        raise ValueError(f"No MET class with index {index}")

    @classmethod
    def from_label(cls, label: str) -> "MetClass":
        for member in cls:
            if member.label == label:
                return member
        raise ValueError(f"No MET class named {label!r}")

    @classmethod
    def labels(cls):
        """Canonical class names in index order."""
        return [member.label for member in cls]
