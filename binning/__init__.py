"""Class-interval binning for choropleth maps.

Provides equal-interval, quantile, natural breaks (Jenks) and user-defined
classification of a numeric attribute, with value-to-class lookup and
legend label formatting.
"""

from enum import Enum
from typing import Any, List, Union

from binning.base import Classifier
from binning.equal_interval import EqualIntervalClassifier
from binning.quantiles import QuantileClassifier
from binning.natural_breaks import NaturalBreaksClassifier, jenks_class_starts
from binning.user_defined import UserDefinedClassifier
from binning.errors import InvalidArgument, OutOfRange, ClassCountWarning
from binning.intervals import (
    assign,
    assign_many,
    format_labels,
    validate_breakpoints,
)
from binning.utils import (
    validate_sample,
    canonical_params_json,
    param_hash_from_json,
    HYPERPARAM_KEYS,
    load_values_df,
    classify_frame,
    legend_records,
    write_classes,
)


class Strategy(str, Enum):
    """Breakpoint strategies accepted by compute_breaks()."""

    EQUAL_WIDTH = "equal_interval"
    QUANTILE = "quantiles"
    NATURAL_BREAKS = "natural_breaks"


_CLASSIFIERS = {
    "equal_interval": EqualIntervalClassifier,
    "quantiles": QuantileClassifier,
    "natural_breaks": NaturalBreaksClassifier,
    "user_defined": UserDefinedClassifier,
}


def make_classifier(name: Union[str, Strategy], **kwargs) -> Classifier:
    """Factory function to create classifier instances.

    Args:
        name: Strategy name ("equal_interval", "quantiles", "natural_breaks",
            or "user_defined") or a Strategy member.
        **kwargs: Strategy-specific parameters.

    Returns:
        Classifier instance.

    Raises:
        ValueError: If strategy name is unknown.

    Examples:
        >>> classifier = make_classifier("quantiles", k=4)
        >>> classifier = make_classifier(Strategy.NATURAL_BREAKS, k=5, cap_k=True)
        >>> classifier = make_classifier("user_defined", bins=[10, 20, 50])
    """
    key = name.value if isinstance(name, Strategy) else name
    if key not in _CLASSIFIERS:
        raise ValueError(
            f"Unknown strategy: {name}. Must be one of: {', '.join(_CLASSIFIERS)}"
        )
    return _CLASSIFIERS[key](**kwargs)


def compute_breaks(
    sample: Any,
    k: int,
    strategy: Union[str, Strategy],
    cap_k: bool = False,
) -> List[float]:
    """Compute k+1 breakpoints for a sample.

    Args:
        sample: Non-empty sequence of finite numbers.
        k: Number of classes.
        strategy: Strategy member or its string value.
        cap_k: Lower k to the distinct value count (with a
            ClassCountWarning) instead of raising.

    Returns:
        List of k+1 non-decreasing breakpoints; first is min(sample), last
        is max(sample).

    Raises:
        InvalidArgument: If the sample, k or strategy is invalid.
    """
    try:
        strategy = Strategy(strategy)
    except ValueError:
        raise InvalidArgument(
            f"Unknown strategy: {strategy!r}. "
            f"Must be one of: {', '.join(s.value for s in Strategy)}"
        )
    return make_classifier(strategy, k=k, cap_k=cap_k).fit(sample).bins()


__all__ = [
    "Strategy",
    "Classifier",
    "EqualIntervalClassifier",
    "QuantileClassifier",
    "NaturalBreaksClassifier",
    "UserDefinedClassifier",
    "make_classifier",
    "compute_breaks",
    "jenks_class_starts",
    "assign",
    "assign_many",
    "format_labels",
    "validate_breakpoints",
    "validate_sample",
    "InvalidArgument",
    "OutOfRange",
    "ClassCountWarning",
    "canonical_params_json",
    "param_hash_from_json",
    "HYPERPARAM_KEYS",
    "load_values_df",
    "classify_frame",
    "legend_records",
    "write_classes",
]
