"""Unit tests for testing utilities."""

from wiregraph.application import Resolver
from wiregraph.domain import ConcreteType, Lifecycle
from wiregraph.infrastructure.testing import TestResolver, create_mock_resolver


class EmailSender:
    def send(self, to):
        return f"smtp:{to}"


class FakeEmailSender(EmailSender):
    def send(self, to):
        return f"fake:{to}"


class SignupService:
    def __init__(self, sender: EmailSender):
        self.sender = sender


class TestTestResolverInitialization:
    """Test cases for TestResolver initialization."""

    def test_without_parent(self):
        """Test that a parentless test resolver starts empty."""
        resolver = TestResolver()
        assert len(resolver.registry) == 0
        assert resolver.overrides == {}

    def test_inherits_parent_bindings(self):
        """Test that parent bindings are visible."""
        parent = Resolver()
        parent.bind(EmailSender, FakeEmailSender)

        resolver = TestResolver(parent)

        assert isinstance(resolver.resolve(SignupService).sender, FakeEmailSender)

    def test_inherits_parent_settings(self):
        """Test that the parent's settings are reused."""
        parent = Resolver()
        assert TestResolver(parent).settings is parent.settings

    def test_is_a_resolver(self):
        """Test that TestResolver can stand in for Resolver."""
        assert isinstance(TestResolver(), Resolver)


class TestMocking:
    """Test cases for mock helpers."""

    def test_mock_singleton(self):
        """Test that the mock instance is injected everywhere."""
        resolver = TestResolver()
        fake = FakeEmailSender()

        resolver.mock_singleton(EmailSender, fake)

        assert resolver.resolve(SignupService).sender is fake
        assert resolver.resolve(EmailSender) is fake
        assert resolver.overrides[EmailSender] is fake

    def test_mock_singleton_does_not_touch_parent(self):
        """Test that overrides do not leak into the parent resolver."""
        parent = Resolver()
        resolver = TestResolver(parent)

        resolver.mock_singleton(EmailSender, FakeEmailSender())

        assert EmailSender not in parent.registry
        assert type(parent.resolve(EmailSender)) is EmailSender

    def test_mock_transient(self):
        """Test that the transient factory runs per resolution."""
        resolver = TestResolver()
        resolver.mock_transient(EmailSender, FakeEmailSender)

        first = resolver.resolve(EmailSender)
        second = resolver.resolve(EmailSender)

        assert isinstance(first, FakeEmailSender)
        assert first is not second

    def test_override_binding(self):
        """Test overriding with an arbitrary rule and lifecycle."""
        resolver = TestResolver()
        resolver.override_binding(EmailSender, ConcreteType(target=FakeEmailSender), Lifecycle.SINGLETON)

        assert resolver.resolve(EmailSender) is resolver.resolve(EmailSender)
        assert isinstance(resolver.resolve(EmailSender), FakeEmailSender)

    def test_mock_by_dotted_name(self):
        """Test that overrides accept dotted type names."""
        from wiregraph.application.settings import ResolverSettings

        settings = ResolverSettings(max_depth=3)
        resolver = TestResolver()
        resolver.mock_singleton("wiregraph.application.settings.ResolverSettings", settings)

        assert resolver.resolve(ResolverSettings) is settings


class TestResetOverrides:
    """Test cases for reset and context manager cleanup."""

    def test_reset_restores_parent_bindings(self):
        """Test that reset brings back the parent's bindings."""
        parent = Resolver()
        parent.bind(EmailSender, FakeEmailSender)
        resolver = TestResolver(parent)

        resolver.mock_singleton(EmailSender, EmailSender())
        resolver.reset_overrides()

        assert isinstance(resolver.resolve(EmailSender), FakeEmailSender)
        assert resolver.overrides == {}

    def test_reset_without_parent_clears_bindings(self):
        """Test that reset empties a parentless resolver."""
        resolver = TestResolver()
        resolver.mock_singleton(EmailSender, FakeEmailSender())

        resolver.reset_overrides()

        assert len(resolver.registry) == 0

    def test_context_manager_resets(self):
        """Test that leaving the with-block restores bindings."""
        resolver = TestResolver()

        with resolver as active:
            assert active is resolver
            active.mock_singleton(EmailSender, FakeEmailSender())
            assert isinstance(active.resolve(EmailSender), FakeEmailSender)

        assert type(resolver.resolve(EmailSender)) is EmailSender


class TestCreateMockResolver:
    """Test cases for create_mock_resolver."""

    def test_creates_resolver_with_mocks(self):
        """Test that every given pair is mocked."""
        fake = FakeEmailSender()
        resolver = create_mock_resolver((EmailSender, fake))

        assert isinstance(resolver, TestResolver)
        assert resolver.resolve(SignupService).sender is fake

    def test_without_mocks(self):
        """Test creating an empty test resolver."""
        assert len(create_mock_resolver().registry) == 0
