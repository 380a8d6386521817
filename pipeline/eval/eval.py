"""Evaluation harness for receipt extraction strategies.

Runs every registered extraction strategy on a gold dataset of receipts and
computes per-field metrics, so the strategies can be compared on real
layouts.

Gold dataset format (JSON list):
    [{"html_file": "receipts/FT123.html", "expected": {"receiptNo": "FT123", ...}},
     {"html": "<table>...</table>", "expected": {...}}]

``html_file`` paths are relative to the gold file.
"""

import json
from pathlib import Path
from typing import Any

from pipeline.eval.metrics import evaluate_extraction
from receipt_verifier.extraction.base import MalformedMarkupError
from receipt_verifier.extraction.factory import ExtractorRegistry, create_extractor
from receipt_verifier.shared.config import get_settings


def load_gold_dataset(gold_file: Path) -> list[tuple[str, dict[str, Any]]]:
    """Load gold dataset from JSON file.

    Args:
        gold_file: Path to gold dataset JSON

    Returns:
        List of (receipt_html, expected_fields) tuples
    """
    with open(gold_file, encoding="utf-8") as f:
        data = json.load(f)

    samples = []
    for item in data:
        if "html" in item:
            markup = item["html"]
        else:
            markup = (gold_file.parent / item["html_file"]).read_text(encoding="utf-8")
        samples.append((markup, dict(item["expected"])))

    return samples


def run_evaluation(gold_file: Path, strategies: list[str] | None = None) -> dict[str, Any]:
    """Run evaluation on gold dataset.

    Args:
        gold_file: Path to gold dataset JSON file
        strategies: Strategy names to evaluate (default: all registered)

    Returns:
        Evaluation results dict keyed by strategy name
    """
    settings = get_settings()
    samples = load_gold_dataset(gold_file)

    # Score only fields the gold set actually labels
    fields = sorted({name for _, expected in samples for name in expected})
    expected_list = [expected for _, expected in samples]

    results: dict[str, Any] = {}
    for strategy in strategies or ExtractorRegistry.list_extractors():
        extractor = create_extractor(settings, strategy)

        predicted_list = []
        for markup, _ in samples:
            try:
                predicted_list.append(extractor.extract(markup))
            except MalformedMarkupError:
                # Unparsable sample counts as nothing extracted
                predicted_list.append({})

        report = evaluate_extraction(expected_list, predicted_list, fields)
        results[strategy] = {
            "total_samples": report.total_samples,
            "macro_f1": round(report.macro_f1, 4),
            "field_metrics": {
                field: {
                    "precision": round(metrics.precision, 4),
                    "recall": round(metrics.recall, 4),
                    "f1": round(metrics.f1, 4),
                    "support": metrics.support,
                }
                for field, metrics in report.field_metrics.items()
            },
        }

    return results


if __name__ == "__main__":
    gold_file = Path("data/gold/receipts.json")
    all_results = run_evaluation(gold_file)

    for strategy, results in all_results.items():
        print("\n" + "=" * 60)
        print(f"RECEIPT EXTRACTION EVALUATION: {strategy}")
        print("=" * 60)
        print(f"\nTotal Samples: {results['total_samples']}")
        print(f"Macro F1 Score: {results['macro_f1']:.1%}\n")

        print("Per-Field Metrics:")
        print("-" * 60)
        print(f"{'Field':<24} {'Precision':<12} {'Recall':<12} {'F1':<12}")
        print("-" * 60)

        for field, metrics in results["field_metrics"].items():
            print(
                f"{field:<24} {metrics['precision']:<12.1%} "
                f"{metrics['recall']:<12.1%} {metrics['f1']:<12.1%}"
            )

        print("=" * 60)
