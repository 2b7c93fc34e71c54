"""todo-sync: a client that keeps a local todo list in step with a remote Task Service."""

__version__ = "0.1.0"
