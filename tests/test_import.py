"""Verify package imports work correctly."""


def test_import_procscan() -> None:
    """Test that procscan can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import procscan

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert procscan.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from procscan import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_names() -> None:
    import procscan

    for name in procscan.__all__:
        assert hasattr(procscan, name), name
