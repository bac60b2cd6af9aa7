from typing import Dict, Literal

#   파일 단위 변경 종류 (git status 기준)
ChangeKind = Literal[
    "Add",
    "Delete",
    "Modify",
    "Rename",
    "Copy",
]

#   그룹 분류 enum(문자열) 정의
ChangeCategory = Literal[
    "XmlElement",           # 태그 구조 변경
    "XmlAttribute",         # 속성 값 변경
    "XmlContent",           # 태그 없는 텍스트 변경
    "CSharpMethod",
    "CSharpProperty",
    "CSharpImport",         # using / import
    "ConfigurationChange",
    "Documentation",        # 현재 분류 규칙에서는 배정하지 않음
    "Other",
]

CHANGE_KINDS = ("Add", "Delete", "Modify", "Rename", "Copy")

# 리포트 표시용 라벨
CATEGORY_LABELS: Dict[str, str] = {
    "XmlElement": "XML Element",
    "XmlAttribute": "XML Attribute",
    "XmlContent": "XML Content",
    "CSharpMethod": "C# Method",
    "CSharpProperty": "C# Property",
    "CSharpImport": "C# Import",
    "ConfigurationChange": "Configuration",
    "Documentation": "Documentation",
    "Other": "Other",
}


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category)
