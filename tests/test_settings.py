import logging

import pytest
from pydantic import ValidationError

from lazychain import (
    LINK_REGISTRY,
    ChainSettings,
    LinkKind,
    SliceBounds,
    Sorted,
    ValueShape,
    configure,
    factory,
    get_link_class,
    get_settings,
    reset_settings,
    setup_logging,
)


class TestSettings:
    """Test configuration of the chain engine"""

    def test_defaults(self):
        settings = get_settings()
        assert settings.default_shape is ValueShape.SEQUENCE
        assert settings.log_level == "WARNING"
        assert settings.trace_cursors is False

    def test_configure_validates(self):
        with pytest.raises(ValidationError):
            configure(log_level="LOUD")
        with pytest.raises(ValidationError):
            configure(default_shape="tree")
        assert get_settings().log_level == "WARNING", "Failed configure should keep old settings"

    def test_log_level_is_normalized(self):
        settings = configure(log_level="debug")
        assert settings.log_level == "DEBUG"
        assert logging.getLogger("lazychain").level == logging.DEBUG

    def test_reset_settings(self):
        configure(default_shape="mapping", trace_cursors=True)
        settings = reset_settings()
        assert settings == ChainSettings()

    def test_setup_logging(self):
        logger = setup_logging("INFO")
        assert logger.name == "lazychain"
        assert logger.level == logging.INFO

    def test_trace_cursors(self, caplog):
        configure(trace_cursors=True)
        with caplog.at_level(logging.DEBUG, logger="lazychain"):
            factory([1]).map(lambda item, index: item).to_list()
        assert "Created MappedCursor" in caplog.text
        assert "Created SequenceCursor" in caplog.text

    def test_no_trace_by_default(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="lazychain"):
            factory([1]).to_list()
        assert "Created" not in caplog.text

    def test_materialization_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="lazychain"):
            factory([3, 1, 2]).sort().to_list()
        assert "SortedCursor materialized 3 items" in caplog.text


class TestSliceBounds:
    """Test the validated slice parameters"""

    def test_needs_count(self):
        assert SliceBounds.parse(0, 2).needs_count is False
        assert SliceBounds.parse(-1).needs_count is True
        assert SliceBounds.parse(0, -1).needs_count is True

    def test_frozen(self):
        bounds = SliceBounds.parse(1, 2)
        with pytest.raises(ValidationError):
            bounds.begin = 5


class TestLinkRegistry:
    """Test the link kind registry"""

    def test_every_kind_is_registered(self):
        missing = [kind for kind in LinkKind if kind not in LINK_REGISTRY]
        assert missing == [], f"Unregistered link kinds: {missing}"

    def test_lookup(self):
        assert get_link_class(LinkKind.SORTED) is Sorted
        assert factory([1]).sort().kind is LinkKind.SORTED

    def test_repr_names_kind(self):
        assert repr(factory([1]).reverse()) == "<Reversed kind=reversed>"
