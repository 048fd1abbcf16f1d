"""Metadata and localized messages for the no-unused-styles rule."""
from dataclasses import dataclass
from typing import Dict

RULE_ID = "no-unused-styles"
PLUGIN_NAME = "react-native-unused-styles"


@dataclass(frozen=True)
class RuleMeta:
    """Static description of a rule, as shown by ``stylesweep rules``."""
    rule_id: str
    type: str  # problem, suggestion, layout
    description: str
    recommended: bool
    severity: str  # severity in the recommended config
    fixable: bool = False


NO_UNUSED_STYLES = RuleMeta(
    rule_id=RULE_ID,
    type="suggestion",
    description="Detects styles defined in StyleSheet.create in React Native that are not used",
    recommended=True,
    severity="warn",
)

RULES: Dict[str, RuleMeta] = {
    RULE_ID: NO_UNUSED_STYLES,
}

RECOMMENDED_CONFIG = {
    "plugins": [PLUGIN_NAME],
    "rules": {f"{PLUGIN_NAME}/{RULE_ID}": NO_UNUSED_STYLES.severity},
}

DEFAULT_LOCALE = "en"

MESSAGES = {
    "en": "Style '{name}' is defined but never used.",
    "ja": "スタイル '{name}' は定義されていますが使用されていません。",
}

SUPPORTED_LOCALES = tuple(MESSAGES)


def format_message(name: str, locale: str = DEFAULT_LOCALE) -> str:
    """Render the unused-style message for ``name``.

    Raises:
        ValueError: If locale has no message template
    """
    template = MESSAGES.get(locale)
    if template is None:
        raise ValueError(f"Unsupported locale: {locale}. Must be one of {list(SUPPORTED_LOCALES)}")
    return template.format(name=name)
