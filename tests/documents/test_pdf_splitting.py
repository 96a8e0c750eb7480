from __future__ import annotations

from pathlib import Path

import pymupdf
import pytest

from pdftranslator.documents import PageRange, PyMuPDFDocumentTools, plan_page_ranges, split_document
from pdftranslator.documents.splitter import segment_name
from pdftranslator.errors import ExternalToolError, InvalidArgumentError


def _make_pdf(path: Path, pages: int, **save_options: object) -> Path:
    doc = pymupdf.open()
    for number in range(1, pages + 1):
        page = doc.new_page()
        page.insert_text((72, 72), f"Page {number}")
    doc.save(str(path), **save_options)
    doc.close()
    return path


def _page_texts(path: Path) -> list[str]:
    with pymupdf.open(path) as doc:
        return [page.get_text().strip() for page in doc]


def test_plan_covers_every_page_exactly_once() -> None:
    for total in (1, 19, 20, 21, 25, 40, 99, 100):
        ranges = plan_page_ranges(total, 20)
        covered = [page for pages in ranges for page in range(pages.start, pages.end + 1)]
        assert covered == list(range(1, total + 1))
        assert all(pages.page_count <= 20 for pages in ranges)


def test_plan_edge_cases() -> None:
    assert plan_page_ranges(0, 20) == []
    assert plan_page_ranges(20, 20) == [PageRange(1, 20)]
    assert plan_page_ranges(25, 20) == [PageRange(1, 20), PageRange(21, 25)]

    with pytest.raises(InvalidArgumentError):
        plan_page_ranges(10, 0)


def test_short_document_is_returned_unchanged(tmp_path: Path) -> None:
    source = _make_pdf(tmp_path / "short.pdf", 5)

    segments = split_document(PyMuPDFDocumentTools(), source, 20, dest_dir=tmp_path / "split", run_id="abc")

    assert len(segments) == 1
    assert segments[0].path == source
    assert segments[0].pages == PageRange(1, 5)
    assert segments[0].is_split_artifact is False
    assert not (tmp_path / "split").exists()


def test_long_document_is_split_in_page_order(tmp_path: Path) -> None:
    source = _make_pdf(tmp_path / "long.pdf", 25)

    segments = split_document(PyMuPDFDocumentTools(), source, 10, dest_dir=tmp_path / "split", run_id="abc")

    assert [segment.pages for segment in segments] == [PageRange(1, 10), PageRange(11, 20), PageRange(21, 25)]
    assert [segment.path.name for segment in segments] == [
        f"{segment_name('abc', 1)}.pdf",
        f"{segment_name('abc', 2)}.pdf",
        f"{segment_name('abc', 3)}.pdf",
    ]
    assert all(segment.is_split_artifact for segment in segments)

    texts = [text for segment in segments for text in _page_texts(segment.path)]
    assert texts == [f"Page {number}" for number in range(1, 26)]


def test_segment_names_sort_in_page_order() -> None:
    names = [segment_name("run", part) for part in (2, 10, 1)]
    assert sorted(names) == [segment_name("run", 1), segment_name("run", 2), segment_name("run", 10)]


def test_decrypt_removes_owner_password_without_touching_input(tmp_path: Path) -> None:
    source = _make_pdf(
        tmp_path / "locked.pdf",
        3,
        encryption=pymupdf.PDF_ENCRYPT_AES_256,
        owner_pw="owner-secret",
        user_pw="",
    )
    original_bytes = source.read_bytes()
    tools = PyMuPDFDocumentTools()

    decrypted = tools.decrypt(source, tmp_path / "out" / "decrypted.pdf")

    assert source.read_bytes() == original_bytes
    with pymupdf.open(decrypted) as doc:
        assert not doc.is_encrypted
        assert doc.page_count == 3
    assert tools.count_pages(decrypted) == 3


def test_user_password_protected_document_is_rejected(tmp_path: Path) -> None:
    source = _make_pdf(
        tmp_path / "secret.pdf",
        1,
        encryption=pymupdf.PDF_ENCRYPT_AES_256,
        owner_pw="owner-secret",
        user_pw="user-secret",
    )

    with pytest.raises(ExternalToolError) as exc_info:
        PyMuPDFDocumentTools().decrypt(source, tmp_path / "decrypted.pdf")
    assert exc_info.value.tool == "pymupdf"


def test_unreadable_file_raises_tool_error(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"this is not a pdf")

    with pytest.raises(ExternalToolError):
        PyMuPDFDocumentTools().count_pages(bogus)


def test_extract_rejects_out_of_range_pages(tmp_path: Path) -> None:
    source = _make_pdf(tmp_path / "two.pdf", 2)

    with pytest.raises(ExternalToolError):
        PyMuPDFDocumentTools().extract_pages(source, PageRange(2, 3), tmp_path / "part.pdf")
