"""Generate summary reports for translation batches."""

from typing import Any, Dict, List

from i18n_editor.key_resolver import TranslationRecord
from i18n_editor.keypath import MISSING


def _display(value: Any) -> str:
    return "<missing>" if value is MISSING else str(value)


def generate_summary_report(
    key: str,
    before: Dict[str, Any],
    after: List[TranslationRecord],
    source_locale: str
) -> Dict[str, Any]:
    """
    Compare the values of a key before and after a translate batch.

    Args:
        key: Translated key
        before: Locale code -> value prior to translation
        after: Records returned by translate_batch
        source_locale: Source locale code

    Returns:
        Dictionary with report data:
        {
            "key": str,
            "source_locale": str,
            "translated": int,  # locales whose value changed
            "kept": int,        # locales that kept their previous value
            "locales": {code: {"before": str, "after": str, "status": str}}
        }
    """
    locales = {}
    translated = 0
    kept = 0

    for record in after:
        if record.locale_code == source_locale:
            status = "source"
        elif before.get(record.locale_code, MISSING) != record.value:
            status = "translated"
            translated += 1
        else:
            status = "kept"
            kept += 1

        locales[record.locale_code] = {
            "before": _display(before.get(record.locale_code, MISSING)),
            "after": _display(record.value),
            "status": status,
        }

    return {
        "key": key,
        "source_locale": source_locale,
        "translated": translated,
        "kept": kept,
        "locales": locales,
    }


def print_summary_report(report: Dict[str, Any]) -> None:
    """
    Print a formatted summary report.

    Args:
        report: Report dictionary from generate_summary_report
    """
    print("\n" + "=" * 60)
    print(f"Translation Summary: {report['key']} (source: {report['source_locale']})")
    print("=" * 60)
    for locale, row in report["locales"].items():
        print(f"{locale:<10} {row['status']:<11} {row['after']}")
    print("-" * 60)
    print(f"Translated:      {report['translated']}")
    print(f"Kept:            {report['kept']}")
    print("=" * 60 + "\n")
