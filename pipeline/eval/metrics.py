"""Evaluation metrics for receipt extraction.

Computes precision, recall, and F1 scores for extracted receipt fields.
Based on standard information extraction evaluation methodologies.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from receipt_verifier.extraction.schema import FIELD_NAMES
from receipt_verifier.verification.receipt import equals


@dataclass
class FieldMetrics:
    """Metrics for a single field."""

    precision: float
    recall: float
    f1: float
    support: int  # Number of samples


@dataclass
class EvaluationReport:
    """Complete evaluation report."""

    field_metrics: dict[str, FieldMetrics]
    macro_f1: float
    total_samples: int


def calculate_field_match(expected: Any, predicted: Any) -> bool:
    """Check if extracted field matches expected value.

    Uses the same typed equality as verification, so a match here means the
    field would pass ``verify_only``.

    Args:
        expected: Ground truth value (None if absent)
        predicted: Extracted value (None if absent)

    Returns:
        True if both are absent or the values are equal
    """
    if expected is None and predicted is None:
        return True
    return equals(expected, predicted)


def evaluate_extraction(
    expected: list[Mapping[str, Any]],
    predicted: list[Mapping[str, Any]],
    fields: Iterable[str] = FIELD_NAMES,
) -> EvaluationReport:
    """Evaluate extraction accuracy against ground truth.

    Computes precision, recall, and F1 for each receipt field.

    Args:
        expected: Ground truth field mappings
        predicted: Extracted field mappings
        fields: Field names to score

    Returns:
        Evaluation report with per-field and overall metrics
    """
    if len(expected) != len(predicted):
        raise ValueError("Expected and predicted lists must have same length")

    field_metrics: dict[str, FieldMetrics] = {}

    for field in fields:
        true_positives = 0
        false_positives = 0
        false_negatives = 0

        for exp, pred in zip(expected, predicted, strict=True):
            exp_value = exp.get(field)
            pred_value = pred.get(field)

            # True Positive: both have value and they match
            if exp_value is not None and pred_value is not None:
                if calculate_field_match(exp_value, pred_value):
                    true_positives += 1
                else:
                    false_positives += 1  # Predicted wrong value
                    false_negatives += 1  # Missed correct value

            # False Negative: expected value but got None
            elif exp_value is not None and pred_value is None:
                false_negatives += 1

            # False Positive: predicted value but should be None
            elif exp_value is None and pred_value is not None:
                false_positives += 1

        precision = (
            true_positives / (true_positives + false_positives)
            if (true_positives + false_positives) > 0
            else 0.0
        )
        recall = (
            true_positives / (true_positives + false_negatives)
            if (true_positives + false_negatives) > 0
            else 0.0
        )
        f1 = 2 * (precision * recall) / (precision + recall) if (precision + recall) > 0 else 0.0

        field_metrics[field] = FieldMetrics(
            precision=precision,
            recall=recall,
            f1=f1,
            support=len(expected),
        )

    macro_f1 = (
        sum(m.f1 for m in field_metrics.values()) / len(field_metrics) if field_metrics else 0.0
    )

    return EvaluationReport(
        field_metrics=field_metrics,
        macro_f1=macro_f1,
        total_samples=len(expected),
    )
