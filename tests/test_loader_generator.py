"""Tests for rendering the nested loader and the flat bundle."""

from pathlib import Path

import pytest

from pipelines.amd_loader.generator import (
    build_load_chain,
    bundle_path_for,
    filter_declarations,
    generate,
    render_bundle,
)
from references.models import ReferenceSet


@pytest.mark.unit
def test_empty_chain_renders_bare_module():
    assert build_load_chain(ReferenceSet()) == "define(function (require) { \n\n});"


@pytest.mark.unit
def test_single_before_file():
    text = build_load_chain(ReferenceSet(before=["./a"]))
    assert text == (
        "define(function (require) { \n"
        '\t require(["./a"],function (){\n'
        "\n"
        "\t });\n"
        "});"
    )


@pytest.mark.unit
def test_full_chain_nests_in_load_order():
    refs = ReferenceSet(
        before=["./a"],
        generated=["./g"],
        unordered=["./b", "./c"],
        after=["./d"],
    )
    text = build_load_chain(refs)
    assert text == (
        "define(function (require) { \n"
        '\t require(["./a"],function (){\n'
        '\t require(["./g"],function (){\n'
        '\t require(["./b",\n'
        '\t\t  "./c"],function (){\n'
        '\t require(["./d"],function (){\n'
        "\n"
        "\t });\n"
        "\t });\n"
        "\t });\n"
        "\t });\n"
        "});"
    )


@pytest.mark.unit
def test_ordered_groups_keep_manifest_order():
    refs = ReferenceSet(
        before=["./b1", "./b2", "./b3"],
        unordered=["./u"],
        after=["./a1", "./a2", "./a3"],
    )
    text = build_load_chain(refs)
    positions = [
        text.index(f'"{name}"')
        for name in ("./b1", "./b2", "./b3", "./u", "./a1", "./a2", "./a3")
    ]
    assert positions == sorted(positions)
    assert text.count("require([") == 7


@pytest.mark.unit
def test_batches_are_single_calls():
    refs = ReferenceSet(generated=["./g1", "./g2"], unordered=["./u1", "./u2"])
    text = build_load_chain(refs)
    assert text.count("require([") == 2


@pytest.mark.unit
def test_crlf_line_endings():
    text = build_load_chain(ReferenceSet(before=["./a"]), eol="\r\n")
    assert "\r\n" in text
    assert "\n" not in text.replace("\r\n", "")


@pytest.mark.unit
def test_render_bundle_lists_every_file_in_group_order():
    refs = ReferenceSet(
        before=["./a"], generated=["./g"], unordered=["./u"], after=["./z"]
    )
    assert render_bundle(refs) == (
        'define(["./a","./g","./u","./z"],function () {});'
    )


@pytest.mark.unit
def test_render_bundle_of_nothing():
    assert render_bundle(ReferenceSet()) == "define([],function () {});"


@pytest.mark.unit
def test_bundle_path_for():
    assert bundle_path_for(Path("build/loader.js")) == Path("build/loader.bin.js")
    assert bundle_path_for(Path("build/loader")) == Path("build/loader.bin.js")


@pytest.mark.unit
def test_filter_declarations_covers_every_group():
    refs = ReferenceSet(
        before=["/s/tsd.d.ts", "/s/a.ts"],
        generated=["/s/g.d.ts"],
        unordered=["/s/u.ts", "/s/u.d.ts"],
        after=["/s/z.d.ts"],
    )
    filtered = filter_declarations(refs)
    assert filtered.all == ["/s/a.ts", "/s/u.ts"]


@pytest.mark.unit
def test_generate_excludes_declarations_from_both_artifacts(tmp_path):
    src = tmp_path / "src"
    refs = ReferenceSet(
        before=[str(src / "defs" / "lib.d.ts"), str(src / "a.ts")],
        unordered=[str(src / "b.ts"), str(src / "types.d.ts")],
    )

    artifacts = generate(
        refs, out_dir=tmp_path / "js", loader_path=tmp_path / "loader.js"
    )

    for text in (artifacts.loader_text, artifacts.bundle_text):
        assert ".d" not in text
        assert '"./js/a"' in text
        assert '"./js/b"' in text
    assert artifacts.bundle_path == tmp_path / "loader.bin.js"
    assert artifacts.diagnostics == []


@pytest.mark.unit
def test_generate_warns_when_nothing_is_left(tmp_path):
    refs = ReferenceSet(before=[str(tmp_path / "only.d.ts")])

    artifacts = generate(
        refs, out_dir=tmp_path / "js", loader_path=tmp_path / "loader.js"
    )

    assert [d.code for d in artifacts.diagnostics] == ["no-files"]
    assert artifacts.loader_text == "define(function (require) { \n\n});"
    assert artifacts.bundle_text == "define([],function () {});"
