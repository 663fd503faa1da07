"""Unit test fixtures - small on-disk corpora and prebuilt indexes"""

import pytest

from qsearch.index.tfidf import TFIDFIndex


@pytest.fixture
def cat_dog_index():
    """Index over A: "the cat sat", B: "the dog sat" """
    index = TFIDFIndex()
    for term in ["THE", "CAT", "SAT"]:
        index.handle_token("A", term)
    for term in ["THE", "DOG", "SAT"]:
        index.handle_token("B", term)
    return index


@pytest.fixture
def corpus(tmp_path):
    """
    Small mixed-format corpus:

    corpus/
        a.txt          "the cat sat"
        b.txt          "the dog sat"
        notes.md       unregistered extension (parsed as text)
        sub/
            page.html
            data.xml
    """
    root = tmp_path / "corpus"
    sub = root / "sub"
    sub.mkdir(parents=True)
    (root / "a.txt").write_text("the cat sat")
    (root / "b.txt").write_text("the dog sat")
    (root / "notes.md").write_text("# Notes\ncat facts")
    (sub / "page.html").write_text(
        "<html><body><h1>Zebra</h1><p>Stripes everywhere</p></body></html>"
    )
    (sub / "data.xml").write_text(
        '<animals><animal kind="bird">parrot</animal><animal>owl</animal></animals>'
    )
    return root
