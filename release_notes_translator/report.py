"""Generate summary reports for translation runs."""

from typing import Any, Dict, Optional

from release_notes_translator.prompts.translate import ANDROID_CHAR_LIMIT


def generate_summary_report(
    translations: Dict[str, Optional[str]],
    master_locale: str,
    provider_name: str,
    platform: Optional[str] = None
) -> Dict[str, Any]:
    """
    Generate a summary report for a translation run.

    Args:
        translations: Mapping of locale -> translated text or None
        master_locale: Source locale
        provider_name: Provider identifier
        platform: "ios" or "android"

    Returns:
        Dictionary with report data:
        {
            "provider": str,
            "master_locale": str,
            "locales": int,
            "translated": int,
            "failed": int,
            "failed_locales": list[str],
            "over_limit": list[str]   # Android only
        }
    """
    failed_locales = sorted(locale for locale, text in translations.items() if text is None)

    # AI providers are only asked to respect the limit; surface violations
    over_limit = []
    if platform == "android":
        over_limit = sorted(
            locale for locale, text in translations.items()
            if text is not None and len(text) > ANDROID_CHAR_LIMIT
        )

    return {
        "provider": provider_name,
        "master_locale": master_locale,
        "locales": len(translations),
        "translated": len(translations) - len(failed_locales),
        "failed": len(failed_locales),
        "failed_locales": failed_locales,
        "over_limit": over_limit,
    }


def print_summary_report(report: Dict[str, Any]) -> None:
    """
    Print a formatted summary report.

    Args:
        report: Report dictionary from generate_summary_report
    """
    print("\n" + "=" * 60)
    print(f"Translation Summary: {report['master_locale']} via {report['provider']}")
    print("=" * 60)
    print(f"Locales:      {report['locales']}")
    print(f"Translated:   {report['translated']}")
    print(f"Failed:       {report['failed']}")
    if report["failed_locales"]:
        print(f"  {', '.join(report['failed_locales'])}")
    if report["over_limit"]:
        print(f"Over {ANDROID_CHAR_LIMIT} chars: {', '.join(report['over_limit'])}")
    print("=" * 60 + "\n")
