import pytest

from mdsplit.cli import main


def test_main_writes_slides_and_reports(tmp_path, capsys):
    source = tmp_path / "talk.md"
    source.write_text("# Page 1\n\nSome content.\n\n# Page 2\n\nMore content.")
    out = tmp_path / "slides"
    main(["--in", str(source), "--out", str(out), "--max-height", "5"])
    assert sorted(path.name for path in out.iterdir()) == ["slide-1.md", "slide-2.md"]
    assert f"Wrote 2 slides to {out}" in capsys.readouterr().out


def test_main_accepts_inert_layout_flags(tmp_path):
    source = tmp_path / "talk.md"
    source.write_text("# Title\n")
    out = tmp_path / "slides"
    main(
        [
            "--in", str(source),
            "--out", str(out),
            "--template-size", "presentation",
            "--theme", "dark",
            "--font-size", "14",
            "--dpi", "144",
            "--max-width", "300",
        ]
    )
    assert (out / "slide-1.md").read_text() == "# Title\n"


def test_main_exits_with_message_on_read_failure(tmp_path):
    with pytest.raises(SystemExit, match="Error splitting Markdown: read input"):
        main(["--in", str(tmp_path / "absent.md"), "--out", str(tmp_path)])


def test_bad_template_is_rejected_by_argparse(tmp_path):
    with pytest.raises(SystemExit):
        main(["--template-size", "poster", "--out", str(tmp_path)])
