from __future__ import annotations
from typing import Callable, Dict, List, Optional

from diffpatterns.core.config import MARKUP_EXTENSIONS, SOURCE_EXTENSIONS

CategoryRuleFn = Callable[[str, str], Optional[str]]
# (file_path lower, diff text lower) -> category or None

RestructureRuleFn = Callable[[str, str], Optional[str]]
# (deleted content lower, added content lower) -> description or None

ContentRuleFn = Callable[[List[str], List[str]], Optional[str]]
# (added lines lower, removed lines lower) -> description or None


def is_markup_path(path: str) -> bool:
    return path.lower().endswith(MARKUP_EXTENSIONS)


def is_source_path(path: str) -> bool:
    return path.lower().endswith(SOURCE_EXTENSIONS)


def _has_tags(content: str) -> bool:
    return "<" in content and ">" in content


# ---------- category ----------

def rule_markup_attribute(path, content):
    if not is_markup_path(path) or not _has_tags(content):
        return None
    if "attribute" in content or "=" in content:
        return "XmlAttribute"
    return None


def rule_markup_element(path, content):
    if is_markup_path(path) and _has_tags(content):
        return "XmlElement"
    return None


def rule_markup_content(path, content):
    if is_markup_path(path):
        return "XmlContent"
    return None


def rule_source_import(path, content):
    if is_source_path(path) and ("using " in content or "import " in content):
        return "CSharpImport"
    return None


def rule_source_method(path, content):
    if not is_source_path(path) or "public " not in content:
        return None
    if "class " in content or "method " in content or "()" in content:
        return "CSharpMethod"
    return None


def rule_source_property(path, content):
    if is_source_path(path) and ("{ get" in content or "{ set" in content):
        return "CSharpProperty"
    return None


def rule_configuration(path, content):
    if "config" in path or path.endswith(".json"):
        return "ConfigurationChange"
    return None


CATEGORY_RULES: Dict[str, CategoryRuleFn] = {
    "markup_attribute": rule_markup_attribute,
    "markup_element": rule_markup_element,
    "markup_content": rule_markup_content,
    "source_import": rule_source_import,
    "source_method": rule_source_method,
    "source_property": rule_source_property,
    "configuration": rule_configuration,
}


# ---------- restructure (삭제 + 삽입 혼합 그룹, markup 파일) ----------

def rule_restructure_component(deleted, added):
    if "<component" in deleted and "<component" in added:
        return "Restructure Component XML elements"
    return None


def rule_restructure_defaultfrom(deleted, added):
    if "defaultfrom" in deleted or "defaultfrom" in added:
        return "Restructure DefaultFrom XML elements"
    return None


def rule_restructure_post301format(deleted, added):
    if "post301format" in deleted or "post301format" in added:
        return "Restructure Post301Format XML elements"
    return None


def rule_restructure_layoutattributes(deleted, added):
    if "layoutattributes" in deleted or "layoutattributes" in added:
        return "Restructure LayoutAttributes XML elements"
    return None


RESTRUCTURE_RULES: Dict[str, RestructureRuleFn] = {
    "component": rule_restructure_component,
    "defaultfrom": rule_restructure_defaultfrom,
    "post301format": rule_restructure_post301format,
    "layoutattributes": rule_restructure_layoutattributes,
}


# ---------- content (단일 종류 그룹, markup 파일) ----------

def rule_empty_defaultfrom_removal(added, removed):
    if any("<defaultfrom>()" in line for line in removed):
        return "Remove empty DefaultFrom elements"
    return None


def rule_post301format_autoime_removal(added, removed):
    if not any("post301format" in line and "autoime(nocontrol)" in line for line in removed):
        return None

    # 다시 추가된 Post301Format에는 AUTOIME(NoControl)이 없거나 self-closing
    if any("post301format" in line and ("/>" in line or "autoime(nocontrol)" not in line) for line in added):
        return "Remove AUTOIME(NoControl) from Post301Format elements"
    return None


def rule_layoutattributes_config(added, removed):
    if any("layoutattributes" in line and "config(" in line for line in added + removed):
        return "Update LayoutAttributes CONFIG settings"
    return None


def rule_container_sequence(added, removed):
    if any("containersequence" in line for line in added + removed):
        return "Update ContainerSequence values"
    return None


def rule_markup_attributes(added, removed):
    if any('="' in line for line in added + removed):
        return "Modify XML attributes"
    return None


def rule_markup_elements(added, removed):
    if any("<" in line and ">" in line for line in added + removed):
        return "Modify XML elements"
    return None


CONTENT_RULES: Dict[str, ContentRuleFn] = {
    "empty_defaultfrom_removal": rule_empty_defaultfrom_removal,
    "post301format_autoime_removal": rule_post301format_autoime_removal,
    "layoutattributes_config": rule_layoutattributes_config,
    "container_sequence": rule_container_sequence,
    "markup_attributes": rule_markup_attributes,
    "markup_elements": rule_markup_elements,
}
