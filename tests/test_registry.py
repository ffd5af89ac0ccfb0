"""Tests for the fragment registry."""

import pytest

from i18n_collector.core.registry import FragmentEntry, FragmentRegistry


class TestFragmentEntry:
    """Test cases for FragmentEntry."""

    def test_fields(self):
        entry = FragmentEntry(key='k1', value='Hello')

        assert entry.key == 'k1'
        assert entry.value == 'Hello'

    def test_frozen(self):
        entry = FragmentEntry(key='k1', value='Hello')

        with pytest.raises(AttributeError):
            entry.value = 'Bye'

    def test_equality(self):
        assert FragmentEntry('k', 'v') == FragmentEntry('k', 'v')


class TestFragmentRegistry:
    """Test cases for FragmentRegistry."""

    def test_empty(self):
        registry = FragmentRegistry()

        assert len(registry) == 0
        assert registry.all_module_ids() == []
        assert registry.entries_for('missing.js') == []

    def test_record_entries(self):
        registry = FragmentRegistry()
        registry.record('a.js', [FragmentEntry('k1', 'Hello')])

        assert 'a.js' in registry
        assert registry.entries_for('a.js') == [FragmentEntry('k1', 'Hello')]

    def test_record_accepts_pairs(self):
        registry = FragmentRegistry()
        registry.record('a.js', [('k1', 'Hello'), ('k2', 'World')])

        assert registry.entries_for('a.js') == [
            FragmentEntry('k1', 'Hello'),
            FragmentEntry('k2', 'World'),
        ]

    def test_record_overwrites(self):
        registry = FragmentRegistry()
        registry.record('a.js', [('k1', 'Hello')])
        registry.record('a.js', [('k2', 'World')])

        assert registry.entries_for('a.js') == [FragmentEntry('k2', 'World')]
        assert registry.all_module_ids() == ['a.js']

    def test_record_empty_or_none(self):
        registry = FragmentRegistry()
        registry.record('a.js', [])
        registry.record('b.js')

        assert registry.all_module_ids() == ['a.js', 'b.js']
        assert registry.entries_for('a.js') == []
        assert registry.entries_for('b.js') == []

    def test_keys_may_repeat_within_module(self):
        registry = FragmentRegistry()
        registry.record('a.js', [('k1', 'Hello'), ('k1', 'Hello')])

        assert len(registry.entries_for('a.js')) == 2

    def test_all_module_ids_in_first_recorded_order(self):
        registry = FragmentRegistry()
        registry.record('b.js', [])
        registry.record('a.js', [])
        registry.record('b.js', [('k', 'v')])

        assert registry.all_module_ids() == ['b.js', 'a.js']
        assert list(registry) == ['b.js', 'a.js']

    def test_entries_for_returns_copy(self):
        registry = FragmentRegistry()
        registry.record('a.js', [('k1', 'Hello')])

        registry.entries_for('a.js').append(FragmentEntry('k2', 'x'))

        assert len(registry.entries_for('a.js')) == 1

    def test_record_consumes_generator(self):
        registry = FragmentRegistry()
        registry.record('a.js', ((f'k{i}', f'v{i}') for i in range(3)))

        assert [e.value for e in registry.entries_for('a.js')] == ['v0', 'v1', 'v2']

    def test_clear(self):
        registry = FragmentRegistry()
        registry.record('a.js', [('k1', 'Hello')])
        registry.clear()

        assert len(registry) == 0
        assert 'a.js' not in registry

    def test_registries_are_independent(self):
        first = FragmentRegistry()
        second = FragmentRegistry()
        first.record('a.js', [('k1', 'Hello')])

        assert second.all_module_ids() == []
