from __future__ import annotations
import logging
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


def apply_rules(rules: Dict[str, Callable[..., Optional[str]]], *args) -> Optional[str]:
    """
    등록 순서대로 rule을 돌려 처음 나온 결과를 반환한다.
    매칭되는 rule이 없으면 None.
    """
    for name, rule in rules.items():
        result = rule(*args)
        if result:
            logger.debug("Rule %s matched: %s", name, result)
            return result

    return None
