from docxref.cli import build_parser, main


def _make_corpus(dpath):
    dpath.mkdir()
    (dpath / "a.xml").write_text('<term id="alpha">Alpha</term>')
    (dpath / "b.xml").write_text("See alpha for details.")


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.dpath == "xml"
    assert args.pattern == r"\.xml$"
    assert args.mode == "legacy"
    assert not args.dry_run


def test_main(tmp_path, capsys):
    dpath = tmp_path / "xml"
    _make_corpus(dpath)
    main([str(dpath)])
    assert (
        dpath / "b.xml"
    ).read_text() == 'See <link linkend="alpha">alpha</link> for details.'
    out = capsys.readouterr().out
    assert "linking" in out
    assert "1 documents changed" in out


def test_main_default_folder(tmp_path, monkeypatch):
    _make_corpus(tmp_path / "xml")
    monkeypatch.chdir(tmp_path)
    main([])
    assert "<link" in (tmp_path / "xml" / "b.xml").read_text()


def test_main_dry_run(tmp_path, capsys):
    dpath = tmp_path / "xml"
    _make_corpus(dpath)
    main([str(dpath), "--dry-run"])
    assert (dpath / "b.xml").read_text() == "See alpha for details."
    assert "would change" in capsys.readouterr().out
