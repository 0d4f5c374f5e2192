import pytest

from core.prompt_loader import REQUIRED_BLOCKS, REQUIRED_KINDS, load_prompts


def test_bundled_prompts_are_complete():
    prompts = load_prompts()
    assert set(prompts["roles"]) == set(REQUIRED_KINDS)
    assert set(prompts["output"]) == set(REQUIRED_KINDS)
    assert set(prompts["blocks"]) == set(REQUIRED_BLOCKS)
    assert all(text == text.strip() for text in prompts["blocks"].values())


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_prompts(tmp_path / "nope.yaml")


def test_missing_section(tmp_path):
    p = tmp_path / "prompts.yaml"
    p.write_text("roles: {}\n", encoding="utf-8")
    with pytest.raises(ValueError, match="roles.title"):
        load_prompts(p)


def test_empty_template(tmp_path):
    kinds = "\n".join(f"  {k}: text" for k in REQUIRED_KINDS)
    blocks = "\n".join(f"  {b}: text" for b in REQUIRED_BLOCKS if b != "theme")
    p = tmp_path / "prompts.yaml"
    p.write_text(f"roles:\n{kinds}\nblocks:\n{blocks}\n  theme: '   '\noutput:\n{kinds}\n", encoding="utf-8")
    with pytest.raises(ValueError, match="blocks.theme"):
        load_prompts(p)


def test_not_a_mapping(tmp_path):
    p = tmp_path / "prompts.yaml"
    p.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_prompts(p)
