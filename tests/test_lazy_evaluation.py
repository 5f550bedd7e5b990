import pytest

from lazychain import factory


class TestLazyEvaluation:
    """Test that nothing is read before a cursor is advanced"""

    def test_deferred_execution(self):
        """Test that operations are not executed immediately"""
        call_count = 0

        def track_calls(item, index):
            nonlocal call_count
            call_count += 1
            return item * 2

        chain = factory(range(10)).map(track_calls)
        assert call_count == 0, "Operations should not execute during definition"

        result = chain.first(3).to_list()
        assert call_count == 3, f"Expected 3 calls, got {call_count}"
        assert result == [0, 2, 4], f"Unexpected result: {result}"

    def test_map_filter_performs_no_reads(self, recording_source):
        """Test map(filter(source)) reads nothing until a terminal operation"""
        source = recording_source(range(10))
        chain = factory(source).filter(lambda item, index: item % 2 == 0).map(
            lambda item, index: item * 10
        )

        assert source.cursors == 0, "Building a chain should not request cursors"
        assert source.touched == 0, "Building a chain should not read the source"

        assert chain.to_list() == [0, 20, 40, 60, 80]
        assert source.moves == 11

    def test_cursor_creation_performs_no_reads(self, recording_source):
        """Test that requesting a cursor does not read the source"""
        source = recording_source([3, 1, 2])
        chain = factory(source).sort().unique().flatten().zip([1]).concat([4])

        cursor = chain.get_cursor()
        assert source.touched == 0, f"Cursor creation touched the source {source.touched} times"

        assert cursor.move_next() is True
        assert source.touched > 0

    def test_partial_consumption_stays_lazy(self, recording_source):
        """Test that taking the first element reads only what is needed"""
        source = recording_source(range(1000))
        first = factory(source).map(lambda item, index: item + 1).first()

        assert first == 1
        assert source.moves == 1, f"Expected a single move, got {source.moves}"

    def test_multiple_consumption(self):
        """Test that chains can be consumed multiple times"""
        chain = factory(range(5)).map(lambda item, index: item * 2)

        result1 = chain.to_list()
        result2 = chain.to_list()

        assert result1 == result2, "Multiple consumptions should yield same result"
        assert result1 == [0, 2, 4, 6, 8], f"Unexpected result: {result1}"

    def test_each_cursor_starts_its_own_traversal(self, recording_source):
        """Test that independent cursors of one chain do not share state"""
        source = recording_source(["a", "b", "c"])
        chain = factory(source).map(lambda item, index: item.upper())

        first = chain.get_cursor()
        second = chain.get_cursor()
        assert first.move_next() and first.move_next()
        assert second.move_next()

        assert first.current() == "B"
        assert second.current() == "A"
        assert source.cursors == 2

    def test_sort_materializes_on_first_move(self, recording_source):
        """Test that sorting pulls upstream only when the cursor is advanced"""
        source = recording_source([5, 3, 4])
        cursor = factory(source).sort().get_cursor()
        assert source.touched == 0

        assert cursor.move_next()
        assert cursor.current() == 3
        assert source.moves == 4, "The whole upstream should be pulled at once"

    def test_negative_slice_counts_upstream(self, recording_source):
        """Test that a negative offset forces a counting pass over upstream"""
        source = recording_source(range(5))
        assert factory(source).slice(-2).to_list() == [3, 4]
        assert source.resets == 1, "Counting pass should rewind the upstream cursor"

    def test_callback_errors_propagate(self):
        """Test that errors raised by callbacks reach the caller"""
        chain = factory([1, 0]).map(lambda item, index: 1 / item)
        with pytest.raises(ZeroDivisionError):
            chain.to_list()
