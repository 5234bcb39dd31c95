"""测试 validators 模块的参数验证函数"""

import re
from datetime import date

import pytest
from rusty_results.prelude import Err, Ok

from record_filter import InvalidPredicateArguments, field_value
from record_filter.core.validators import (
    validate_bound,
    validate_candidates,
    validate_children,
    validate_pattern,
    validate_range,
    validate_size_range,
    validate_texts,
    validate_threshold,
)

v = field_value("v")


class TestValidateRange:
    """测试区间边界验证"""

    @pytest.mark.parametrize("lo,hi", [
        (1, 5),
        (1, 1),  # 两端相等
        (1.5, 2),
        (date(2024, 1, 1), date(2024, 12, 31)),
    ])
    def test_valid_range(self, lo, hi):
        match validate_range(lo, hi):
            case Ok(value):
                assert value == (lo, hi)
            case Err(e):
                pytest.fail(e.message)

    @pytest.mark.parametrize("lo,hi,expected_error", [
        (5, 1, "大于上界"),
        ("a", 5, "'a'"),
        (1, date(2024, 1, 1), "类型不兼容"),
        (True, 5, "True"),
    ])
    def test_invalid_range(self, lo, hi, expected_error):
        match validate_range(lo, hi):
            case Ok(_):
                pytest.fail("应该验证失败")
            case Err(e):
                assert expected_error in e.message

    def test_multiple_errors_collected(self):
        """收集所有错误（不 fail fast）"""
        match validate_range("a", "b"):
            case Err(e):
                assert "'a'" in e.message
                assert "'b'" in e.message
                assert ";" in e.message
            case Ok(_):
                pytest.fail("应该验证失败")

    def test_bound(self):
        assert isinstance(validate_bound(3), Ok)
        assert isinstance(validate_bound(None), Err)


class TestValidateArguments:
    """测试其他参数验证"""

    @pytest.mark.parametrize("result,ok", [
        (validate_size_range(0, 3), True),
        (validate_size_range(3, 0), False),
        (validate_size_range(-1, 3), False),
        (validate_texts(["a", "b"]), True),
        (validate_texts(["a", 1]), False),
        (validate_texts("ab"), False),  # 单个字符串不是列表
        (validate_candidates([1, None]), True),
        (validate_candidates("ab"), False),
        (validate_candidates(42), False),
        (validate_pattern(r"\d+"), True),
        (validate_pattern(re.compile("x")), True),
        (validate_pattern("(unclosed"), False),
        (validate_pattern(re.compile(b"a+")), False),  # bytes 模式不能匹配字符串
        (validate_threshold(0.5), True),
        (validate_threshold(1.5), False),
        (validate_threshold("0.5"), False),
        (validate_children(()), True),
    ])
    def test_result(self, result, ok):
        assert isinstance(result, Ok) is ok


class TestBuilderRaises:
    """构造器把验证失败转换为 InvalidPredicateArguments"""

    @pytest.mark.parametrize("build,expected_error", [
        (lambda: v.between_incl(5, 1), "大于上界"),
        (lambda: v.greater("10"), "不是数值、日期或时间类型"),
        (lambda: v.length(-1), "非负整数"),
        (lambda: v.length_between(4, 2), "长度下界"),
        (lambda: v.starts_with(1), "必须是字符串"),
        (lambda: v.equals_ignore_case(None), "必须是字符串"),
        (lambda: v.equals_any("AB"), "不是单个字符串"),
        (lambda: v.equals_any_ignore_case(["a", 2]), "必须都是字符串"),
        (lambda: v.regex("[a-"), "正则表达式"),
        (lambda: v.regex(re.compile(b"a+")), "bytes 模式"),
        (lambda: v.similar("x", threshold=2), "相似度阈值"),
    ])
    def test_invalid_arguments(self, build, expected_error):
        with pytest.raises(InvalidPredicateArguments, match=re.escape(expected_error)):
            build()

    def test_hint_has_suggestion(self):
        with pytest.raises(InvalidPredicateArguments) as exc_info:
            v.between_incl(5, 1)
        assert exc_info.value.hint.suggestion == "交换两个边界的顺序"
        assert "建议" in str(exc_info.value)


if __name__ == "__main__":
    # 运行测试
    pytest.main([__file__, "-v"])
