"""Unit tests for HookRegistry.remove."""

from dataclasses import dataclass

from plugin_hooks.registry import HookRegistry


async def foo(data, options):
    pass


async def bar(data, options):
    pass


class TestRemove:
    """Test removing handlers."""

    def test_removes_the_added_function(self):
        """Test that only the given handler is removed from the key."""
        hooks = {}
        registry = HookRegistry({"map": hooks})

        registry.add("map", "example", foo)
        registry.add("map", "different", foo)
        registry.add("map", "example", bar)

        registry.remove("map", "example", foo)

        example = hooks["example"]
        assert len(example) == 1
        assert example[0].handler is bar
        assert "different" in hooks
        assert hooks["different"][0].handler is foo

    def test_removes_every_registration_of_the_handler(self):
        """Test that duplicate registrations of one handler are all removed."""
        hooks = {}
        registry = HookRegistry({"map": hooks})

        registry.add("map", "example", foo, {"priority": 1})
        registry.add("map", "example", bar)
        registry.add("map", "example", foo, {"priority": 500})

        registry.remove("map", "example", foo)

        assert [entry.handler for entry in hooks["example"]] == [bar]

    def test_removes_the_key_from_the_map_if_there_are_no_more_fns(self):
        """Test that an emptied key is deleted, not left empty."""
        hooks = {}
        registry = HookRegistry({"map": hooks})

        registry.add("map", "example", foo)
        registry.add("map", "example", bar)

        registry.remove("map", "example", foo)
        assert len(hooks["example"]) == 1

        registry.remove("map", "example", bar)
        assert "example" not in hooks

    def test_removes_all_functions_if_no_function_is_given(self):
        """Test that omitting the handler clears the key."""
        hooks = {}
        registry = HookRegistry({"map": hooks})

        registry.add("map", "example", foo)
        registry.add("map", "example", bar)
        registry.add("map", "different", bar)

        registry.remove("map", "example")

        assert "example" not in hooks
        assert "different" in hooks

    def test_can_delete_nothing(self):
        """Test that removing from an unknown key is a no-op."""
        hooks = {}
        registry = HookRegistry({"map": hooks})

        registry.remove("map", "example")
        registry.remove("map", "example", foo)

        assert hooks == {}

    def test_unknown_handler_leaves_key_untouched(self):
        """Test that removing an unregistered handler keeps the entries."""
        hooks = {}
        registry = HookRegistry({"map": hooks})

        registry.add("map", "example", foo)
        registry.remove("map", "example", bar)

        assert [entry.handler for entry in hooks["example"]] == [foo]

    def test_removes_bound_methods(self):
        """Test that a bound method can be removed via a fresh attribute access."""

        class Plugin:
            async def handle(self, data, options):
                pass

        plugin = Plugin()
        other = Plugin()
        hooks = {}
        registry = HookRegistry({"map": hooks})

        registry.add("map", "example", plugin.handle)
        registry.add("map", "example", other.handle)
        registry.remove("map", "example", plugin.handle)

        assert len(hooks["example"]) == 1
        assert hooks["example"][0].handler.__self__ is other

    def test_equal_but_distinct_handlers_are_kept(self):
        """Test that removal matches by identity, not equality."""

        @dataclass
        class Plugin:
            name: str

            async def __call__(self, data, options):
                pass

        first = Plugin("a")
        second = Plugin("a")
        hooks = {}
        registry = HookRegistry({"map": hooks})

        registry.add("map", "example", first)
        registry.add("map", "example", second)
        registry.remove("map", "example", first)

        assert first == second
        assert len(hooks["example"]) == 1
        assert hooks["example"][0].handler is second

    def test_bound_methods_of_equal_instances_are_kept(self):
        """Test that bound methods only match for the identical instance."""

        @dataclass
        class Plugin:
            name: str

            async def handle(self, data, options):
                pass

        first = Plugin("a")
        second = Plugin("a")
        hooks = {}
        registry = HookRegistry({"map": hooks})

        registry.add("map", "example", first.handle)
        registry.add("map", "example", second.handle)
        registry.remove("map", "example", first.handle)

        assert len(hooks["example"]) == 1
        assert hooks["example"][0].handler.__self__ is second

    def test_replaces_the_stored_list(self):
        """Test that remove stores a new list instead of editing the old one."""
        hooks = {}
        registry = HookRegistry({"map": hooks})

        registry.add("map", "example", foo)
        registry.add("map", "example", bar)
        before = hooks["example"]

        registry.remove("map", "example", foo)

        assert len(before) == 2
        assert hooks["example"] is not before
