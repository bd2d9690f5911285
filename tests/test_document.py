"""Tests for Document, Single and Multiple."""

import pytest

from easyaml.document import Document, Multiple, Single
from easyaml.values import Null, Scalar, Sequence


def test_from_values_empty_is_single_null():
    assert Document.from_values([]) == Single(Null)

def test_from_values_one_is_single():
    assert Document.from_values([Scalar("a")]) == Single(Scalar("a"))

def test_from_values_many_is_multiple():
    doc = Document.from_values([Scalar("a"), Scalar("b")])
    assert doc == Multiple((Scalar("a"), Scalar("b")))

def test_single_iterates_once():
    assert list(Single(Scalar("a"))) == [Scalar("a")]
    assert len(Single(Scalar("a"))) == 1

def test_multiple_iterates_in_order():
    doc = Multiple([Scalar("a"), Null, Scalar("c")])
    assert list(doc) == [Scalar("a"), Null, Scalar("c")]
    assert len(doc) == 3

def test_multiple_accepts_list():
    assert Multiple([Scalar("a")]).items == (Scalar("a"),)

def test_single_and_multiple_differ():
    assert Single(Scalar("a")) != Multiple([Scalar("a")])

def test_to_python():
    assert Single(Sequence([Scalar("1")])).to_python() == ["1"]
    assert Multiple([Scalar("a"), Null]).to_python() == ["a", None]

def test_documents_are_hashable():
    assert hash(Single(Scalar("a"))) == hash(Single(Scalar("a")))

def test_document_base_is_abstract():
    with pytest.raises(TypeError):
        Document()
