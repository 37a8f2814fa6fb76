from __future__ import annotations
import pytest
from pypdf import PdfWriter

from docchat.core.services.document_loader import DocumentLoader
from docchat.core.services.prompt_assembler import PromptAssembler
from docchat.core.services.relevance import RelevanceIndex
from docchat.models.corpus import file_corpus
from docchat.models.corpus.file_corpus import FileCorpusSource


def test_reads_text_file(tmp_path):
    path = tmp_path / "handbook.txt"
    path.write_text("Vacation policy: twenty days.\nSick leave: ten days.", encoding="utf-8")
    assert FileCorpusSource().read(str(path)) == "Vacation policy: twenty days.\nSick leave: ten days."


def test_missing_file_is_not_found(tmp_path):
    assert FileCorpusSource().read(str(tmp_path / "nope.pdf")) is None


def test_directory_is_not_a_corpus(tmp_path):
    assert FileCorpusSource().read(str(tmp_path)) is None


def test_blank_text_is_not_found(tmp_path):
    path = tmp_path / "blank.md"
    path.write_text("   \n\t  ", encoding="utf-8")
    assert FileCorpusSource().read(str(path)) is None


def test_empty_pdf_is_unreadable_not_fatal(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"")
    assert FileCorpusSource().read(str(path)) is None


def test_pdf_without_text_is_not_found(tmp_path):
    path = tmp_path / "scanned.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    with open(path, "wb") as f:
        writer.write(f)
    assert FileCorpusSource().read(str(path)) is None


def test_loader_over_file_source(tmp_path):
    path = tmp_path / "handbook.txt"
    path.write_text("alpha beta gamma delta epsilon", encoding="utf-8")
    loader = DocumentLoader(FileCorpusSource(), str(path), chunk_size=11)
    assert [c.text for c in loader.chunks()] == ["alpha beta", "gamma delta", "epsilon"]


@pytest.mark.parametrize(
    "error",
    [
        ValueError("invalid literal for int() with base 10: b'\\xa1256'"),
        TypeError("argument of type 'NumberObject' is not iterable"),
    ],
)
def test_malformed_pdf_errors_are_not_fatal(monkeypatch, tmp_path, error):
    path = tmp_path / "handbook.pdf"
    path.write_bytes(b"%PDF-1.7\n% mangled xref\n%%EOF\n")

    def broken_reader(*args, **kwargs):
        raise error

    monkeypatch.setattr(file_corpus, "PdfReader", broken_reader)
    assert FileCorpusSource().read(str(path)) is None

    loader = DocumentLoader(FileCorpusSource(), str(path))
    assert loader.chunks() == ()
    assert loader.available is False


def test_corrupted_pdf_bytes_degrade_rag_to_no_match(tmp_path, memory):
    path = tmp_path / "handbook.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    with open(path, "wb") as f:
        writer.write(f)
    raw = path.read_bytes()
    # damage the cross-reference table and trailer
    path.write_bytes(raw[: len(raw) // 2] + b"\xa1\xa1 garbage xref \xa1" * 8 + b"\n%%EOF\n")

    loader = DocumentLoader(FileCorpusSource(), str(path))
    assembler = PromptAssembler(index=RelevanceIndex(loader), memory=memory)
    prompt = assembler.build_messages("What is the vacation policy?", rag_enabled=True)
    assert prompt.grounding == "no_match"
    assert prompt.sources == []
