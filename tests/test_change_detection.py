"""测试变更检测谓词"""

import pytest

from record_filter import InvalidPredicateArguments, field_value, prior_field_value

stage = field_value("stage")


def pair(current, prior):
    """构造只有 stage 字段的 (当前, 旧) 记录，None 表示字段未设置"""
    return {"stage": current}, {"stage": prior}


class TestChanged:
    def test_changed(self):
        assert stage.changed().evaluate(*pair("won", "open"))
        assert not stage.changed().evaluate(*pair("open", "open"))

    def test_changed_between_absent_and_value(self):
        assert stage.changed().evaluate(*pair("open", None))
        assert stage.changed().evaluate(*pair(None, "open"))
        assert not stage.changed().evaluate(*pair(None, None))

    @pytest.mark.parametrize("matcher", [
        stage.changed(),
        stage.changed_from("open"),
        stage.changed_to("won"),
        stage.changed_from_to("open", "won"),
        stage.changed_from_any_to_any(["open"], ["won"]),
    ])
    def test_no_prior_is_always_false(self, matcher):
        """没有旧记录时恒为 False（不使用 prior 回退）"""
        assert not matcher.evaluate({"stage": "won"})
        assert not matcher.evaluate({"stage": "won"}, None)


class TestChangedFromTo:
    """测试 from / to 约束"""

    @pytest.mark.parametrize("current,prior,expected", [
        ("won", "open", True),
        ("won", "lost", False),  # from 不匹配
        ("lost", "open", False),  # to 不匹配
        ("won", None, False),  # 旧值未设置
        ("won", "won", False),  # 没有变化
    ])
    def test_changed_from_to(self, current, prior, expected):
        assert stage.changed_from_to("open", "won").evaluate(*pair(current, prior)) is expected

    @pytest.mark.parametrize("matcher,current,prior,expected", [
        (stage.changed_from("open"), "won", "open", True),
        (stage.changed_from("open"), "open", "open", False),
        (stage.changed_from("open"), "won", "lost", False),
        (stage.changed_from(None), "won", None, True),  # 从未设置变为有值
        (stage.changed_from_any(["open", "new"]), "won", "new", True),
        (stage.changed_from_any(["open", "new"]), "won", "lost", False),
        (stage.changed_to("won"), "won", "open", True),
        (stage.changed_to("won"), "won", "won", False),
        (stage.changed_to(None), None, "open", True),  # 被清空
        (stage.changed_to_any(["won", "lost"]), "lost", "open", True),
        (stage.changed_to_any(["won", "lost"]), "open", "new", False),
        (stage.changed_from_any_to(["open", "new"], "won"), "won", "new", True),
        (stage.changed_from_any_to(["open", "new"], "won"), "lost", "new", False),
        (stage.changed_from_to_any("open", ["won", "lost"]), "lost", "open", True),
        (stage.changed_from_to_any("open", ["won", "lost"]), "lost", "new", False),
        (stage.changed_from_any_to_any(["a", "b"], ["c", "d"]), "d", "a", True),
        (stage.changed_from_any_to_any(["a", "b"], ["c", "d"]), "a", "b", False),
    ])
    def test_variants(self, matcher, current, prior, expected):
        assert matcher.evaluate(*pair(current, prior)) is expected

    def test_bool_int_change_detected(self):
        """1 -> True 视为变化"""
        flag = field_value("flag")
        assert flag.changed().evaluate({"flag": True}, {"flag": 1})
        assert flag.changed_to(True).evaluate({"flag": True}, {"flag": 0})
        assert not flag.changed().evaluate({"flag": True}, {"flag": True})

    def test_prior_record_without_field(self):
        """旧记录存在但字段未设置，视为 ABSENT 参与比较"""
        assert stage.changed().evaluate({"stage": "won"}, {})
        assert not stage.changed_from("open").evaluate({"stage": "won"}, {})


class TestPriorModeRejected:
    """变更检测只能用于当前值字段"""

    @pytest.mark.parametrize("build", [
        lambda f: f.changed(),
        lambda f: f.changed_from("x"),
        lambda f: f.changed_to_any(["x"]),
        lambda f: f.changed_from_to("x", "y"),
    ])
    def test_rejected(self, build):
        with pytest.raises(InvalidPredicateArguments, match="不能用于旧值字段"):
            build(prior_field_value("stage"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
