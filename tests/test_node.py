from docquery import CommentNode, ElementNode, Node, TextNode


def test_append_child_sets_parent():
    root = Node()
    div = ElementNode("div")
    root.append_child(div)
    assert div.parent is root
    assert root.has_child_nodes()
    assert not div.has_child_nodes()


def test_kinds():
    assert ElementNode("p").is_element
    assert not ElementNode("p").is_text
    assert TextNode("x").is_text
    assert not TextNode("x").is_element
    comment = CommentNode("x")
    assert comment.name == "#comment"
    assert not comment.is_text
    assert not comment.is_element
    assert not Node().is_element


def test_element_get():
    div = ElementNode("div", [("class", "a"), ("class", "b")])
    assert div.get("class") == "a"
    assert div.get("id") is None
    assert div.get("id", "") == ""


def test_to_text():
    div = ElementNode("div")
    div.append_child(TextNode("  hello "))
    span = ElementNode("span")
    span.append_child(TextNode("world"))
    div.append_child(span)
    div.append_child(CommentNode("hidden"))
    assert div.to_text() == "hello world"
    assert div.to_text(separator="", strip=False) == "  hello world"


def test_text_node_has_no_children():
    assert TextNode("x").children == []
    assert TextNode(None).data == ""
