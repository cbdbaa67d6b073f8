import pytest

from outliner_lib.models import OutlineItem
from pdfoutliner import MARK_TEXT, Application

OUTLINE = [OutlineItem(1, "Introduction", 1, 200, 100), OutlineItem(2, "Scope", 1, 72, 300)]


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "paper.pdf"
    path.write_bytes(b"%PDF-1.4")
    return str(path)


@pytest.fixture
def pipeline(mocker):
    mocker.patch("pdfoutliner.setup_logging")
    mocks = {
        "open_document": mocker.patch("pdfoutliner.open_document"),
        "get_outline": mocker.patch("pdfoutliner.get_outline", return_value=[]),
        "extract_outline": mocker.patch(
            "pdfoutliner.extract_outline", side_effect=lambda *a: list(OUTLINE)
        ),
        "set_outline": mocker.patch("pdfoutliner.set_outline"),
        "save_document": mocker.patch("pdfoutliner.save_document"),
    }
    return mocks


def run(argv):
    return Application(Application.parse_arguments(argv)).run()


def test_pdf_output(pdf_file, pipeline):
    assert run([pdf_file]) == 0
    doc = pipeline["open_document"].return_value
    pipeline["set_outline"].assert_called_once_with(doc, OUTLINE, 2)
    pipeline["save_document"].assert_called_once_with(doc, pdf_file[:-4] + "_outlined.pdf")


def test_pdf_output_with_options(pdf_file, pipeline, tmp_path):
    out = str(tmp_path / "out.pdf")
    assert run([pdf_file, out, "--mark", "--fold-level", "0", "-p", "MAX_LEVELS=1"]) == 0
    params = pipeline["extract_outline"].call_args.args[1]
    assert params.MAX_LEVELS == 1
    outline = pipeline["set_outline"].call_args.args[1]
    assert outline[0] == OutlineItem(1, MARK_TEXT, 1)
    assert pipeline["set_outline"].call_args.args[2] == 0
    pipeline["save_document"].assert_called_once_with(pipeline["open_document"].return_value, out)


def test_txt_output(pdf_file, pipeline):
    assert run([pdf_file, "-o", "txt"]) == 0
    with open(pdf_file[:-4] + "_outline.txt", encoding="utf-8") as f:
        assert f.read() == "Introduction\t1\t200,100\n\tScope\t1\t72,300"
    pipeline["save_document"].assert_not_called()


def test_stdout_output(pdf_file, pipeline, capsys):
    assert run([pdf_file, "-o", "stdout"]) == 0
    assert "Introduction\t1\t200,100" in capsys.readouterr().out


def test_existing_outline_is_kept(pdf_file, pipeline, capsys):
    pipeline["get_outline"].return_value = [OutlineItem(1, "Existing", 1)]
    assert run([pdf_file]) == 0
    assert "Nothing to do" in capsys.readouterr().out
    pipeline["extract_outline"].assert_not_called()
    pipeline["save_document"].assert_not_called()


def test_ignore_existing(pdf_file, pipeline):
    pipeline["get_outline"].return_value = [OutlineItem(1, "Existing", 1)]
    assert run([pdf_file, "--ignore-existing"]) == 0
    pipeline["extract_outline"].assert_called_once()
    pipeline["set_outline"].assert_called_once()


def test_fromtxt_default_path(pdf_file, pipeline):
    with open(pdf_file[:-4] + "_outline.txt", "w", encoding="utf-8") as f:
        f.write("Chapter one\t2\n\tSection\t3\t40\n")
    assert run([pdf_file, "--fromtxt"]) == 0
    pipeline["extract_outline"].assert_not_called()
    outline = pipeline["set_outline"].call_args.args[1]
    assert outline == [OutlineItem(1, "Chapter one", 2), OutlineItem(2, "Section", 3, y=40)]


def test_fromtxt_malformed_file_fails(pdf_file, pipeline, tmp_path):
    toc = tmp_path / "toc.txt"
    toc.write_text("Chapter one\tfirst\n", encoding="utf-8")
    assert run([pdf_file, "--fromtxt", str(toc)]) == 1
    pipeline["set_outline"].assert_not_called()


def test_input_errors(tmp_path, pipeline):
    assert run([str(tmp_path / "notes.txt")]) == 1
    assert run([str(tmp_path / "missing.pdf")]) == 1
    pipeline["open_document"].assert_not_called()


def test_bad_params_fail(pdf_file, pipeline):
    assert run([pdf_file, "-p", "NOPE=1"]) == 1
