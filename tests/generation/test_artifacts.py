"""Tests for per-artifact generation steps."""

from pathlib import Path

import pytest

from cuegen.context import ProcedureContext
from cuegen.generation.artifacts import (
    GITIGNORE_ARTIFACT,
    PACKAGE_ARTIFACT,
    collect_fragments,
    generate_gitignore,
    generate_package_json,
    setup_cue_mod,
)
from cuegen.generation.merge import MODULE_CUE


class TestCollectFragments:
    """Tests for fragment file discovery."""

    @pytest.mark.asyncio
    async def test_base_plus_existing_fragments(
        self, features_root: Path, ctx: ProcedureContext
    ) -> None:
        files = await collect_fragments(
            PACKAGE_ARTIFACT,
            ["node", "ts", "cue"],
            features_root / "npm/package",
            ctx,
        )

        assert files == ["base.cue", "node.cue", "ts.cue"]

    @pytest.mark.asyncio
    async def test_package_fragments_use_field_names(
        self, features_root: Path, ctx: ProcedureContext
    ) -> None:
        files = await collect_fragments(
            PACKAGE_ARTIFACT, ["vite-react"], features_root / "npm/package", ctx
        )

        assert files == ["base.cue", "viteReact.cue"]

    @pytest.mark.asyncio
    async def test_gitignore_fragments_use_feature_names(
        self, features_root: Path, ctx: ProcedureContext
    ) -> None:
        files = await collect_fragments(
            GITIGNORE_ARTIFACT, ["vite-react", "ts"], features_root / "git/ignore", ctx
        )

        assert files == ["base.cue", "vite-react.cue"]


class TestGeneratePackageJson:
    """Tests for package.json evaluation + merge."""

    @pytest.mark.asyncio
    async def test_evaluates_in_config_dir_with_output_expression(
        self, project: Path, features_root: Path, ctx: ProcedureContext, fake_evaluator
    ) -> None:
        pkg = await generate_package_json(["ts"], {"name": "@me/lib"}, project, ctx)

        assert pkg is not None
        assert pkg["name"] == "@me/lib"
        files, expression, cwd = fake_evaluator.eval_calls[0]
        assert files == ["base.cue", "ts.cue"]
        assert expression == "output"
        assert cwd == features_root / "npm/package"

    @pytest.mark.asyncio
    async def test_evaluator_failure_returns_none(
        self, project: Path, ctx: ProcedureContext, fake_evaluator
    ) -> None:
        del fake_evaluator.outputs["output"]

        assert await generate_package_json(["ts"], None, project, ctx) is None

    @pytest.mark.asyncio
    async def test_non_object_output_returns_none(
        self, project: Path, ctx: ProcedureContext, fake_evaluator
    ) -> None:
        fake_evaluator.outputs["output"] = ["not", "an", "object"]

        assert await generate_package_json(["ts"], None, project, ctx) is None


class TestGenerateGitignore:
    """Tests for .gitignore evaluation."""

    @pytest.mark.asyncio
    async def test_renders_patterns(self, project: Path, ctx: ProcedureContext) -> None:
        assert await generate_gitignore(["node"], project, ctx) == "node_modules/\ndist/\n"

    @pytest.mark.asyncio
    async def test_non_list_output_returns_none(
        self, project: Path, ctx: ProcedureContext, fake_evaluator
    ) -> None:
        fake_evaluator.outputs["patterns"] = {"oops": True}

        assert await generate_gitignore(["node"], project, ctx) is None

    @pytest.mark.asyncio
    async def test_non_string_pattern_returns_none(
        self, project: Path, ctx: ProcedureContext, fake_evaluator
    ) -> None:
        fake_evaluator.outputs["patterns"] = ["node_modules/", None, 3]

        assert await generate_gitignore(["node"], project, ctx) is None


class TestSetupCueMod:
    """Tests for the module descriptor artifact."""

    @pytest.mark.asyncio
    async def test_creates_directory_and_module_file(
        self, project: Path, ctx: ProcedureContext
    ) -> None:
        assert await setup_cue_mod(project, ctx) is True

        module = project / "cue.mod" / "module.cue"
        assert module.read_text(encoding="utf-8") == MODULE_CUE

    @pytest.mark.asyncio
    async def test_existing_module_file_untouched(
        self, project: Path, ctx: ProcedureContext
    ) -> None:
        (project / "cue.mod").mkdir()
        module = project / "cue.mod" / "module.cue"
        module.write_text('module: "example.com/mine"\n', encoding="utf-8")

        assert await setup_cue_mod(project, ctx) is True
        assert module.read_text(encoding="utf-8") == 'module: "example.com/mine"\n'
