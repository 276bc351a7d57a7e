"""
Basic import tests to verify the core functionality.
"""

import pytest


def test_builder_service_imports():
    """Test that the builder pipeline can be imported."""
    from builder_service import (
        parse,
        tag_lines,
        load_external,
        measure_tags,
        compile_script,
        resolve_selection,
    )

    assert callable(parse)
    assert callable(tag_lines)
    assert callable(load_external)
    assert callable(measure_tags)
    assert callable(compile_script)
    assert callable(resolve_selection)


def test_models_imports():
    """Test that models can be instantiated."""
    from builder_service.models import Tag, Line, LineAssociation, Mode, VersionEntry

    tag = Tag(name="CANVAS", description="canvas drawing")
    assert str(tag) == "CANVAS"
    assert tag.size == 0

    line = Line(code="draw(); ", associations=[LineAssociation(tag, Mode.AND)])
    assert line.is_tagged is True

    entry = VersionEntry(version="1.0.0", source="umbra.js")
    assert entry.model_dump() == {"version": "1.0.0", "source": "umbra.js"}


def test_tags_compare_by_identity():
    from builder_service.models import Tag

    assert Tag(name="A") != Tag(name="A")


def test_config_imports():
    """Test that configuration helpers are available."""
    from config_manager import get_builder_config, get_app_config, get_postprocess_config

    assert get_builder_config().max_workers >= 1
    assert isinstance(get_app_config().port, int)
    assert get_postprocess_config() is not None


def test_web_module_imports():
    """Test that the web module factory can be imported."""
    from app.builder import create_builder_module, BuilderWebService

    assert callable(create_builder_module)
    assert BuilderWebService is not None


def test_cli_imports():
    import umbra_builder

    assert umbra_builder.__version__
    assert callable(umbra_builder.main)


if __name__ == "__main__":
    pytest.main([__file__])
