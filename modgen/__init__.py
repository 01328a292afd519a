"""modgen -- module and page scaffolder for modular SvelteKit front-ends."""

__version__ = "0.1.0"
