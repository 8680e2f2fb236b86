from dataclasses import dataclass
from typing import List, Tuple, Union

import numpy as np

# Arity of fields with one value per interior point (all points except the first and the last)
PER_INTERIOR_POINT = "per_interior_point"


@dataclass(frozen=True)
class FeatureField:
    name: str
    arity: Union[int, str]

    def length(self, num_points: int) -> int:
        if self.arity == PER_INTERIOR_POINT:
            return max(num_points - 2, 0)
        return self.arity


# Emission order of a FeatureBlock
STROKE_FEATURE_SCHEMA: Tuple[FeatureField, ...] = (
    FeatureField("length", 1),
    FeatureField("directness", 1),
    FeatureField("curvature", 1),
    FeatureField("sin_direction", 1),
    FeatureField("cos_direction", 1),
    FeatureField("sin_curvature", 1),
    FeatureField("cos_curvature", 1),
    FeatureField("endpoint_diff", 2),
    FeatureField("control_point_distribution", PER_INTERIOR_POINT),
    FeatureField("angles", PER_INTERIOR_POINT),
    FeatureField("time_coefficients", PER_INTERIOR_POINT),
    FeatureField("pen_up_flag", 1),
)


def block_length(num_points: int, schema: Tuple[FeatureField, ...] = STROKE_FEATURE_SCHEMA) -> int:
    """Number of floats a stroke with num_points points is encoded into."""
    return sum([field.length(num_points) for field in schema])


class FeatureBlockBuilder:
    """Collects the features of one stroke and checks them against the schema order and arities."""

    def __init__(self, num_points: int, schema: Tuple[FeatureField, ...] = STROKE_FEATURE_SCHEMA) -> None:
        self.num_points = num_points
        self.schema = schema
        self.values: List[float] = []
        self.next_field = 0

    def add(self, name: str, values) -> "FeatureBlockBuilder":
        if self.next_field >= len(self.schema):
            raise ValueError(f"Feature {name} added after the last schema field")
        field = self.schema[self.next_field]
        if field.name != name:
            raise ValueError(f"Expected feature {field.name} but got {name}")
        values = np.atleast_1d(np.asarray(values, dtype=np.float64))
        if values.shape[0] != field.length(self.num_points):
            raise ValueError(f"Feature {name} has {values.shape[0]} values, expected {field.length(self.num_points)}")
        self.values.extend(values.tolist())
        self.next_field += 1
        return self

    def build(self) -> np.ndarray:
        """Returns the finished block with every non-finite value replaced by 0.0.

        Returns:
            np.ndarray: The FeatureBlock. Shape == (block_length(num_points),)
        """
        if self.next_field != len(self.schema):
            missing = [field.name for field in self.schema[self.next_field:]]
            raise ValueError(f"Missing features: {missing}")
        return np.nan_to_num(np.array(self.values, dtype=np.float64), nan=0.0, posinf=0.0, neginf=0.0)
