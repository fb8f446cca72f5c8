from miplib.transform.reformulate import has_reformulation, reformulate
from miplib.transform.scale import nearest_power_of_two, next_power_of_two, nice_power_of_two, scale_gm

__all__ = [
    "has_reformulation",
    "nearest_power_of_two",
    "next_power_of_two",
    "nice_power_of_two",
    "reformulate",
    "scale_gm",
]
