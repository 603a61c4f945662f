"""
Tests for the object construction protocol and attribute access.

Covers required enforcement, validation after coercion, default application,
lazy memoization, writability, unknown keys, key forms and the hooks.
"""

import pytest

from classx import (
    ArgumentShapeError,
    AttributeConfigError,
    AttributeNotWritableError,
    AttrRequiredError,
    ClassX,
    CyclicDefaultError,
    InvalidAttrArgument,
    LazyOptionShouldHaveDefault,
    SchemaFrozenError,
    attribute,
)


class Server(ClassX):
    host = attribute(isa=str)
    port = attribute(isa=int, default=80, coerce={str: int})
    name = attribute(default=lambda mine: f"{mine.host}:{mine.port}")
    tags = attribute(optional=True)


class TestRequired:
    """Tests for required attribute enforcement."""

    def test_missing_required_raises(self):
        """The error names the missing attribute and echoes the input."""
        with pytest.raises(AttrRequiredError) as exc_info:
            Server({"port": 8080})

        assert exc_info.value.name == "host"
        assert "param :host is required" in str(exc_info.value)
        assert "'port': 8080" in str(exc_info.value)

    def test_any_value_satisfies_presence(self):
        """None counts as a supplied value."""

        class Box(ClassX):
            content = attribute()

        assert Box({"content": None}).content is None

    def test_no_arguments_when_nothing_required(self):
        """Classes without required attributes build from nothing."""

        class Empty(ClassX):
            flag = attribute(default=False)

        assert Empty().flag is False


class TestAssignment:
    """Tests for assigning supplied values."""

    def test_coerce_then_validate(self):
        """Coercion runs before validation on construction."""
        server = Server({"host": "localhost", "port": "8080"})

        assert server.port == 8080

    def test_invalid_value_raises(self):
        """The error names the attribute and the failed rule."""
        with pytest.raises(InvalidAttrArgument) as exc_info:
            Server({"host": "localhost", "port": object()})

        assert exc_info.value.name == "port"
        assert "kind_of int" in str(exc_info.value)

    def test_invalid_value_without_coercion(self):
        """A value of the wrong type is rejected when nothing coerces it."""
        with pytest.raises(InvalidAttrArgument):
            Server({"host": 42})

    def test_invalid_error_is_value_error(self):
        """InvalidAttrArgument can be caught as ValueError."""
        with pytest.raises(ValueError):
            Server({"host": 42})

    def test_predicate_exceptions_propagate(self):
        """Exceptions raised by a predicate reach the caller unchanged."""

        class Strict(ClassX):
            count = attribute(validate=lambda v: int(v) > 0)

        with pytest.raises(ValueError, match="invalid literal"):
            Strict({"count": "many"})


class TestDefaults:
    """Tests for the default pass."""

    def test_literal_and_function_defaults(self):
        """Literal and function defaults fill unset attributes."""
        server = Server({"host": "example.org"})

        assert server.port == 80
        assert server.name == "example.org:80"
        assert server.tags is None

    def test_defaults_go_through_coercion_and_validation(self):
        """Default values are coerced and validated like input."""

        class Coerced(ClassX):
            port = attribute(isa=int, default="8000", coerce={str: int})

        assert Coerced().port == 8000

    def test_invalid_default_aborts_construction(self):
        """A default failing validation aborts construction."""

        class Broken(ClassX):
            port = attribute(isa=int, default="eighty")

        with pytest.raises(InvalidAttrArgument):
            Broken()

    def test_default_reading_later_sibling_resolves_it(self):
        """A default may read a sibling declared after it."""
        calls = []

        def make_base_url(mine):
            calls.append("base_url")
            return "http://example.org"

        class Client(ClassX):
            endpoint = attribute(default=lambda mine: mine.base_url + "/api")
            base_url = attribute(default=make_base_url)

        client = Client()

        assert client.endpoint == "http://example.org/api"
        assert calls == ["base_url"]

    def test_cyclic_defaults(self):
        """Defaults reading each other raise instead of recursing."""

        class Loop(ClassX):
            a = attribute(default=lambda mine: mine.b)
            b = attribute(default=lambda mine: mine.a)

        with pytest.raises(CyclicDefaultError):
            Loop()

    def test_supplied_value_skips_default(self):
        """Default functions are not called for supplied attributes."""
        calls = []

        class Tracked(ClassX):
            value = attribute(default=lambda mine: calls.append("called") or 1)

        assert Tracked({"value": 5}).value == 5
        assert calls == []


class TestLazy:
    """Tests for lazy defaults."""

    def test_lazy_default_computed_once_on_first_read(self):
        """Lazy defaults run on first read only, then stay cached."""
        calls = []

        def make(mine):
            calls.append(mine)
            return {"connection": len(calls)}

        class Service(ClassX):
            connection = attribute(lazy=True, default=make)

        service = Service()
        assert calls == []
        assert not service.is_assigned("connection")

        first = service.connection
        second = service.connection

        assert first is second
        assert first == {"connection": 1}
        assert calls == [service]
        assert service.is_assigned("connection")

    def test_lazy_none_result_is_memoized(self):
        """A lazy default returning None is not recomputed."""
        calls = []

        class Service(ClassX):
            handle = attribute(lazy=True, default=lambda mine: calls.append(1))

        service = Service()

        assert service.handle is None
        assert service.handle is None
        assert calls == [1]

    def test_each_instance_gets_its_own_value(self):
        """Lazy values are cached per instance."""

        class Service(ClassX):
            cache = attribute(lazy=True, default=lambda mine: {})

        first, second = Service(), Service()

        assert first.cache is not second.cache

    def test_lazy_supplied_value_wins(self):
        """A supplied value replaces the lazy default."""

        class Service(ClassX):
            cache = attribute(lazy=True, default=lambda mine: {})

        given = {"a": 1}

        assert Service({"cache": given}).cache is given

    def test_lazy_without_default_fails_declaration(self):
        """Declaring lazy without default fails at class creation."""
        with pytest.raises(LazyOptionShouldHaveDefault):

            class Broken(ClassX):
                cache = attribute(lazy=True)


class TestWritable:
    """Tests for writability and deletion."""

    def test_readonly_rejects_reassignment(self):
        """Read-only attributes reject public assignment."""

        class Token(ClassX):
            value = attribute(isa=str)

        token = Token({"value": "abc"})

        with pytest.raises(AttributeNotWritableError):
            token.value = "def"
        with pytest.raises(AttributeError):
            token.value = "def"
        assert token.value == "abc"

    def test_writable_reassignment_coerces_and_validates(self):
        """Public assignment goes through coercion and validation."""
        server = Server({"host": "localhost"})

        server.port = "9000"
        assert server.port == 9000

        with pytest.raises(InvalidAttrArgument):
            server.port = 1.5
        assert server.port == 9000

    def test_optional_readonly(self):
        """An attribute with a default can be made read-only."""

        class Settings(ClassX):
            mode = attribute(default="fast", writable=False)

        settings = Settings()

        with pytest.raises(AttributeNotWritableError):
            settings.mode = "slow"

    def test_internal_write_ignores_writability(self):
        """``_write_attribute`` bypasses the writability check."""

        class Counter(ClassX):
            count = attribute(isa=int)

            def increment(self):
                self._write_attribute("count", self.count + 1)

        counter = Counter({"count": 1})
        counter.increment()

        assert counter.count == 2

    def test_delete_is_rejected(self):
        """Declared attributes cannot be deleted."""
        server = Server({"host": "localhost"})

        with pytest.raises(AttributeNotWritableError):
            del server.port

    def test_plain_attributes_unaffected(self):
        """Undeclared instance attributes behave normally."""
        server = Server({"host": "localhost"})
        server.extra = "note"

        assert server.extra == "note"
        del server.extra


class TestInput:
    """Tests for input shape and key handling."""

    def test_shape_error(self):
        """Non-mapping input raises ArgumentShapeError."""
        with pytest.raises(ArgumentShapeError):
            Server(["host", "localhost"])
        with pytest.raises(TypeError):
            Server("host=localhost")

    def test_unknown_keys_ignored(self):
        """Keys without a declaration are dropped."""
        server = Server({"host": "localhost", "colour": "blue"})

        assert "colour" not in server.to_dict()
        with pytest.raises(AttributeError):
            server.colour

    def test_key_forms_equivalent(self):
        """Mapping keys and keyword arguments build the same object."""
        from_strings = Server({"host": "localhost", "port": 1})
        from_keywords = Server(host="localhost", port=1)

        assert from_strings.to_dict() == from_keywords.to_dict()

    def test_keywords_override_mapping(self):
        """Keyword arguments win over mapping entries."""
        server = Server({"host": "a", "port": 1}, port=2)

        assert server.port == 2

    def test_round_trip(self):
        """``to_dict`` returns every attribute in declaration order."""
        server = Server({"host": "localhost", "port": "81", "tags": ["x"]})

        assert server.to_dict() == {
            "host": "localhost",
            "port": 81,
            "name": "localhost:81",
            "tags": ["x"],
        }
        assert Server.attribute_names() == ["host", "port", "name", "tags"]
        assert Server.required_names() == frozenset({"host"})


class TestHooks:
    """Tests for before_init and after_init."""

    def test_before_and_after_init(self):
        """Hooks run with the raw input and after assignment."""
        events = []

        class Hooked(ClassX):
            value = attribute(isa=int)

            def before_init(self, params):
                events.append(("before", dict(params)))

            def after_init(self):
                events.append(("after", self.value))

        Hooked({"value": 3})

        assert events == [("before", {"value": 3}), ("after", 3)]

    def test_before_init_sees_bad_input(self):
        """``before_init`` runs before the shape check."""
        seen = []

        class Hooked(ClassX):
            def before_init(self, params):
                seen.append(params)

        with pytest.raises(ArgumentShapeError):
            Hooked(42)
        assert seen == [42]

    def test_after_init_not_called_on_failure(self):
        """``after_init`` is skipped when construction fails."""
        events = []

        class Hooked(ClassX):
            value = attribute(isa=int)

            def after_init(self):
                events.append("after")

        with pytest.raises(InvalidAttrArgument):
            Hooked({"value": "x"})
        assert events == []


class TestDeclaration:
    """Tests for the declaration API and introspection."""

    def test_has_classmethod(self):
        """``has`` declares attributes after class creation."""

        class Point(ClassX):
            pass

        Point.has("x", isa=int)
        Point.has("y", isa=int, default=0)

        point = Point(x=1)

        assert (point.x, point.y) == (1, 0)

    def test_declaration_after_instantiation_is_rejected(self):
        """The schema is frozen by the first instance."""

        class Point(ClassX):
            x = attribute(default=0)

        Point()

        with pytest.raises(SchemaFrozenError):
            Point.has("y", default=0)

    def test_name_clashing_with_method(self):
        """Attribute names may not shadow methods."""
        with pytest.raises(AttributeConfigError):

            class Clash(ClassX):
                to_dict = attribute(default=1)

    def test_private_names_rejected(self):
        """Underscore names are reserved."""

        class Point(ClassX):
            pass

        with pytest.raises(AttributeConfigError):
            Point.has("_secret", default=1)

    def test_delegation(self):
        """``handles`` forwards methods to the attribute value."""

        class Wrapper(ClassX):
            items = attribute(default=lambda mine: [], handles={"push": "append", "size": "__len__"})

        wrapper = Wrapper()
        wrapper.push(1)
        wrapper.push(2)

        assert wrapper.items == [1, 2]
        assert wrapper.size() == 2

    def test_attribute_of(self):
        """``attribute_of`` exposes bound attribute objects."""
        server = Server({"host": "localhost"})
        port = server.attribute_of["port"]

        assert list(server.attribute_of) == ["host", "port", "name", "tags"]
        assert port.get() == 80
        port.set("81")
        assert server.port == 81
        assert server.attribute_of["port"] is port
        with pytest.raises(AttributeNotWritableError):
            server.attribute_of["host"].set("other")
        with pytest.raises(KeyError):
            server.attribute_of["missing"]

    def test_repr_and_dir(self):
        """``repr`` shows assigned values and ``dir`` lists attributes."""
        server = Server({"host": "localhost"})

        assert repr(server) == "Server(host='localhost', port=80, name='localhost:80')"
        assert "port" in dir(server)
