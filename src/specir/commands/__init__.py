"""Built-in CLI sub-commands registered by :func:`specir.app.main`."""
