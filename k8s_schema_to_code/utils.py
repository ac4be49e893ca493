"""
Naming helpers shared by the name deriver and the backends.
"""

import re


def upper_first(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def lower_first(text: str) -> str:
    """Lower-case the first character, leaving the rest untouched."""
    return text[:1].lower() + text[1:]


def _split_segments(text: str, delimiters: str) -> list[str]:
    """Split text on any of the delimiter characters, dropping empty segments."""
    pattern = "[" + re.escape(delimiters) + "]+"
    return [segment for segment in re.split(pattern, text) if segment]


def camel_case(text: str, delimiters: str = "-_") -> str:
    """Convert delimiter-separated text to camelCase.

    Only the first letter of each segment is touched, so acronyms survive.

    Examples:
        "apiextensions-apiserver" -> "apiextensionsApiserver"
        "io.k8s.api.core.v1.Pod" (delimiters ".") -> "ioK8sApiCoreV1Pod"
        "JSONSchemaProps" -> "jSONSchemaProps"

    Args:
        text: The text to convert
        delimiters: Characters that separate segments

    Returns:
        camelCase string
    """
    segments = _split_segments(text, delimiters)
    if not segments:
        return ""
    return lower_first(segments[0]) + "".join(upper_first(segment) for segment in segments[1:])


def trim_prefix(text: str, prefix: str) -> str:
    if prefix and text.startswith(prefix):
        return text[len(prefix) :]
    return text


def trim_suffix(text: str, suffix: str) -> str:
    if suffix and text.endswith(suffix):
        return text[: -len(suffix)]
    return text


# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case or camelCase text to PascalCase.

    Used for names of declarations hoisted out of nested schemas, where
    the source is a property name rather than a definition name.

    Examples:
        "first_name" -> "FirstName"
        "matchLabels" -> "MatchLabels"
        "$ref" -> "Ref"
    """
    if not text:
        return ""
    normalized = text.replace("_", " ").replace("-", " ")
    return "".join(word.capitalize() for word in _WORD_PATTERN.findall(normalized) if word)
