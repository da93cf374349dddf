"""Parser configuration."""
import os

DEFAULT_CONFIG = {
    "CHARSET": "latin-1",
    "HEADER_LINE_CONTINUATION": False,
    "REQUIRE_FULL_CONSUMPTION": True,
    "DEBUG": False,
    "LOGGER_NAME": "httpgrammar",
}


class Config(dict):
    """A dict subclass holding parser settings.

    Supports loading from Python objects, mappings, files and environment
    variables.  Keys are uppercase strings by convention.
    """

    def __init__(self, root_path=None, defaults=None):
        if defaults is None and root_path is not None and not isinstance(
            root_path, (str, bytes, os.PathLike)
        ):
            defaults = root_path
            root_path = None
        self.root_path = os.fspath(root_path) if root_path else os.getcwd()
        super().__init__(DEFAULT_CONFIG)
        if defaults:
            self.update(defaults)

    def from_mapping(self, mapping=None, **kwargs):
        """Update config from a mapping or keyword arguments.

        Returns True.
        """
        if mapping is not None:
            if hasattr(mapping, "items"):
                for key, value in mapping.items():
                    self[key] = value
            else:
                for key, value in mapping:
                    self[key] = value
        for key, value in kwargs.items():
            self[key] = value
        return True

    def from_object(self, obj):
        """Update config from an object's uppercase attributes.

        *obj* may be a module, a class, any object with attributes, or an
        importable module name.
        """
        if isinstance(obj, str):
            import importlib
            obj = importlib.import_module(obj)
        for key in dir(obj):
            if key.isupper():
                self[key] = getattr(obj, key)
        return True

    def from_file(self, filename, load, silent=False, text=True):
        """Update config from a file using a custom loader.

        Usage::

            import json
            config.from_file("parser.json", load=json.load)

            import tomllib
            config.from_file("parser.toml", load=tomllib.load, text=False)

        Returns True on success, False if silent and the file is missing.
        """
        filename = os.fspath(filename)
        if not os.path.isabs(filename):
            filename = os.path.join(self.root_path, filename)
        try:
            mode = "r" if text else "rb"
            with open(filename, mode) as f:
                obj = load(f)
        except FileNotFoundError:
            if silent:
                return False
            raise OSError(
                f"[Errno 2] Unable to load configuration file"
                f" (No such file or directory): {filename!r}"
            )
        return self.from_mapping(obj)

    def from_prefixed_env(self, prefix="HTTPGRAMMAR", loads=None):
        """Update config from environment variables with the given prefix.

        With the default prefix, ``HTTPGRAMMAR_DEBUG=true`` sets
        ``config["DEBUG"] = True``.  Values go through ``loads`` (default
        ``json.loads``); if that fails the raw string is kept.
        """
        import json as _json
        if loads is None:
            loads = _json.loads
        prefix = prefix + "_"
        plen = len(prefix)
        for key, value in sorted(os.environ.items()):
            if not key.startswith(prefix):
                continue
            try:
                value = loads(value)
            except ValueError:
                pass
            self[key[plen:]] = value
        return True

    def get_namespace(self, namespace, lowercase=True, trim_namespace=True):
        """Return a dict of the keys that start with *namespace*."""
        result = {}
        for key, value in self.items():
            if not key.startswith(namespace):
                continue
            if trim_namespace:
                key = key[len(namespace):]
            if lowercase:
                key = key.lower()
            result[key] = value
        return result

    def __repr__(self):
        return f"<Config {dict.__repr__(self)}>"
