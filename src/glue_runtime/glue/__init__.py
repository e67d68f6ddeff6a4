from .errors import GlueError, MultipleWorldBuilders, NilWorld
from .hooks import Hook, HookAcceptor, HookPhase, HookRegistry
from .registry import Registry
from .site import RegistrationSite, caller_site
from .source_loader import SourceLoader
from .world import BuilderEntry, EntryKind, Namespace, World, WorldBuilder, capabilities_of

__all__ = [
    "BuilderEntry",
    "EntryKind",
    "GlueError",
    "Hook",
    "HookAcceptor",
    "HookPhase",
    "HookRegistry",
    "MultipleWorldBuilders",
    "Namespace",
    "NilWorld",
    "RegistrationSite",
    "Registry",
    "SourceLoader",
    "World",
    "WorldBuilder",
    "caller_site",
    "capabilities_of",
]
