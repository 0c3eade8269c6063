from docquery import Matcher, NodeMatcher, SequenceMatcher, parse_fragment, split_sequence


def el(html):
    return parse_fragment(html).children[0]


class TestNodeMatcher:
    def test_match_delegates_to_selector(self):
        m = NodeMatcher("div.note")
        assert m.match(el('<div class="note"></div>'))
        assert not m.match(el("<div></div>"))

    def test_callable_selector(self):
        m = NodeMatcher(lambda n: n.name == "pre")
        assert m.match(el("<pre>x</pre>"))

    def test_handler_is_optional(self):
        NodeMatcher("div").handler(el("<div></div>"))

    def test_handler_receives_node(self):
        seen = []
        node = el("<div></div>")
        NodeMatcher("div", seen.append).handler(node)
        assert seen == [node]

    def test_next_matchers_are_fixed(self):
        child_a = NodeMatcher("h1")
        child_b = NodeMatcher("h2")
        m = NodeMatcher("div", None, child_a, child_b)
        first = m.next_matchers()
        second = m.next_matchers()
        assert first == [child_a, child_b]
        assert first[0] is second[0]
        assert first[1] is second[1]

    def test_satisfies_protocol(self):
        assert isinstance(NodeMatcher("div"), Matcher)
        assert isinstance(SequenceMatcher("ul > li"), Matcher)


class TestSplitSequence:
    def test_child_combinators(self):
        assert split_sequence("ul > li > ol > li") == ["ul", "li", "ol", "li"]

    def test_whitespace(self):
        assert split_sequence("  dl   dt ") == ["dl", "dt"]

    def test_compact(self):
        assert split_sequence("ul>li.item") == ["ul", "li.item"]

    def test_quoted_attribute_value_stays_in_step(self):
        assert split_sequence("div[title='a b'] > p") == ["div[title='a b']", "p"]
        assert split_sequence('a[title="x > y"] span') == ['a[title="x > y"]', "span"]

    def test_comma_alternatives_stay_in_step(self):
        assert split_sequence("div.doc > h2, h3") == ["div.doc", "h2,h3"]
        assert split_sequence("dl > dt ,dd") == ["dl", "dt,dd"]

    def test_separators_inside_brackets(self):
        assert split_sequence("ul > a[href*=>]") == ["ul", "a[href*=>]"]

    def test_leading_and_repeated_separators(self):
        assert split_sequence("> ul >> li") == ["ul", "li"]


class TestSequenceMatcher:
    def test_matches_current_step_only(self):
        m = SequenceMatcher("ul > li")
        ul = el("<ul><li>A</li></ul>")
        li = ul.children[0]
        assert m.match(ul)
        assert not m.match(li)
        nxt = m.advance()
        assert nxt.match(li)
        assert not nxt.match(ul)

    def test_advance_returns_new_instance(self):
        m = SequenceMatcher("ul > li")
        nxt = m.advance()
        assert nxt is not m
        assert m.step == 0
        assert nxt.step == 1
        assert m.is_root
        assert not nxt.is_root
        assert nxt.patterns == m.patterns

    def test_handler_only_on_last_step(self):
        seen = []
        m = SequenceMatcher("ul > li", seen.append)
        ul = el("<ul><li>A</li></ul>")
        m.handler(ul)
        assert seen == []
        m.advance().handler(ul.children[0])
        assert seen == [ul.children[0]]

    def test_next_matchers_root_before_last_step(self):
        m = SequenceMatcher("ul > li")
        nexts = m.next_matchers()
        assert len(nexts) == 2
        advanced, restarted = nexts
        assert (advanced.step, advanced.is_root) == (1, False)
        assert (restarted.step, restarted.is_root) == (0, True)

    def test_next_matchers_non_root_before_last_step(self):
        m = SequenceMatcher("ul > li", is_root=False)
        nexts = m.next_matchers()
        assert [(n.step, n.is_root) for n in nexts] == [(1, False)]

    def test_completion_root_non_recursive(self):
        extra = NodeMatcher("code")
        last = SequenceMatcher("li", None, extra)
        nexts = last.next_matchers()
        assert nexts[0] is extra
        assert [(n.step, n.is_root) for n in nexts[1:]] == [(0, True)]

    def test_completion_recursive_has_no_extra_root_restart(self):
        last = SequenceMatcher("ul > li", recursive=True).advance()
        nexts = last.next_matchers()
        assert [(n.step, n.is_root) for n in nexts] == [(0, False)]

    def test_completion_recursive_root(self):
        last = SequenceMatcher("li", recursive=True)
        nexts = last.next_matchers()
        assert [(n.step, n.is_root) for n in nexts] == [(0, False)]

    def test_completion_non_root_non_recursive(self):
        extra = NodeMatcher("code")
        last = SequenceMatcher("ul > li", None, extra, is_root=False).advance()
        assert last.next_matchers() == [extra]

    def test_each_call_produces_fresh_instances(self):
        m = SequenceMatcher("ul > li")
        first = m.next_matchers()
        second = m.next_matchers()
        assert first[0] is not second[0]

    def test_consumed_matcher_never_matches(self):
        m = SequenceMatcher("li").advance()
        assert m.step == 1
        assert not m.match(el("<li>A</li>"))
        assert m.next_matchers() == []

    def test_pattern_list(self):
        m = SequenceMatcher(["dl", "dt"])
        assert m.patterns == ("dl", "dt")

    def test_empty_pattern_never_matches(self):
        m = SequenceMatcher("")
        assert not m.match(el("<div></div>"))
        assert m.next_matchers() == []
