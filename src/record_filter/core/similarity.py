"""文本相似度 - 负责字段值的模糊匹配"""

from thefuzz import fuzz


def fuzzy_ratio(text1: str, text2: str) -> float:
    """计算两个文本的相似度（使用 Levenshtein Distance，忽略大小写）

    Args:
        text1: 第一个文本
        text2: 第二个文本

    Returns:
        相似度分数 (0-1)
    """
    return fuzz.ratio(text1.lower(), text2.lower()) / 100.0


def is_similar(text1: str, text2: str, threshold: float) -> bool:
    """判断两个文本是否相似（完全相同或相似度达到阈值）"""
    return text1 == text2 or fuzzy_ratio(text1, text2) >= threshold
