"""关键词规则表 - 有序 (关键词组, 结果) 对的首个命中分发

匹配规则：
1. 输入文本转小写
2. 按声明顺序逐条检查规则
3. 第一条"任一关键词作为子串出现"的规则胜出
4. 全部未命中时返回默认值（默认值必填，保证函数总能返回）
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class KeywordRule(Generic[T]):
    name: str
    keywords: tuple[str, ...]
    value: T

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


def match_first(text: str, rules: Sequence[KeywordRule[T]], default: T) -> T:
    """返回第一个命中规则的值，否则返回 default"""
    lowered = (text or "").lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.value
    return default


def match_rule_name(text: str, rules: Sequence[KeywordRule[T]], default: str = "generic") -> str:
    """返回命中规则的名称（用于日志和测试断言）"""
    lowered = (text or "").lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.name
    return default
