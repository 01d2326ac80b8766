"""Tests for overlapping text splitting."""

import pytest

from web_retrieval.chunking.splitter import OverlapTextSplitter, split_documents
from web_retrieval.errors import ConfigurationError
from web_retrieval.retrieval.models import RetrievedDocument

PARAGRAPH = (
    "Each value in Rust has an owner. There can only be one owner at a time. "
    "When the owner goes out of scope, the value will be dropped. "
    "References let you refer to a value without taking ownership of it.\n"
    "Borrowing rules are checked at compile time by the borrow checker."
)

ARTICLE = "\n\n".join(f"Section {n}. {PARAGRAPH}" for n in range(1, 9))


def _rebuild(chunks: list[str], overlap: int) -> str:
    return chunks[0] + "".join(chunk[overlap:] for chunk in chunks[1:])


@pytest.mark.parametrize("chunk_size,overlap", [(500, 50), (200, 0), (120, 100), (60, 15)])
def test_round_trip_reconstructs_content(chunk_size, overlap):
    chunks = OverlapTextSplitter(chunk_size, overlap).split_text(ARTICLE)

    assert len(chunks) > 1
    assert _rebuild(chunks, overlap) == ARTICLE


@pytest.mark.parametrize("chunk_size,overlap", [(500, 50), (200, 20), (80, 10)])
def test_chunks_respect_size_bound(chunk_size, overlap):
    chunks = OverlapTextSplitter(chunk_size, overlap).split_text(ARTICLE)

    assert all(len(chunk) <= chunk_size for chunk in chunks)


def test_consecutive_chunks_share_overlap():
    overlap = 50
    chunks = OverlapTextSplitter(500, overlap).split_text(ARTICLE)

    for previous, current in zip(chunks, chunks[1:]):
        assert current[:overlap] == previous[-overlap:]


def test_prefers_paragraph_boundaries():
    chunks = OverlapTextSplitter(1000, 0).split_text(ARTICLE)

    # Each chunk ends at a paragraph break except the last
    assert all(chunk.endswith("\n\n") for chunk in chunks[:-1])


def test_unsplittable_unit_is_kept_whole():
    token = "x" * 300
    content = f"short words before {token} and after"

    chunks = OverlapTextSplitter(100, 10).split_text(content)

    assert any(token in chunk for chunk in chunks)
    assert _rebuild(chunks, 10) == content
    oversized = [chunk for chunk in chunks if len(chunk) > 100]
    assert len(oversized) == 1 and token in oversized[0]


def test_short_content_is_a_single_chunk():
    assert OverlapTextSplitter(500, 50).split_text("A short page.") == ["A short page."]
    assert OverlapTextSplitter(500, 50).split_text("") == []


@pytest.mark.parametrize("chunk_size,overlap", [(500, 600), (500, 500), (0, 0), (100, -1)])
def test_invalid_parameters_raise_configuration_error(chunk_size, overlap):
    with pytest.raises(ConfigurationError):
        OverlapTextSplitter(chunk_size, overlap)


def test_split_documents_keeps_order_and_source():
    docs = [
        RetrievedDocument(url="https://a.example.org/", page_content=ARTICLE),
        RetrievedDocument(url="https://b.example.org/", page_content=""),
        RetrievedDocument(url="https://c.example.org/", page_content=PARAGRAPH),
    ]

    chunks = split_documents(docs, chunk_size=300, overlap=30)

    urls = [chunk.source_url for chunk in chunks]
    first_c = urls.index("https://c.example.org/")
    assert set(urls[:first_c]) == {"https://a.example.org/"}
    assert set(urls[first_c:]) == {"https://c.example.org/"}
    assert "https://b.example.org/" not in urls
    assert [c.index for c in chunks[:first_c]] == list(range(first_c))
    assert _rebuild([c.text for c in chunks[:first_c]], 30) == ARTICLE
