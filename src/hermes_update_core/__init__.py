"""Core building blocks for the Hermes submodule updater."""
