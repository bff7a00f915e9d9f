from rich.pretty import pprint

from ordana import *

__prog__ = "vite"

vite = Command({
    "dev": Subcommand(
        "start the dev server",
        aliases=["serve"],
        arguments={
            "port": Argument(Custom(int, docstype="number"), "port to listen on", short="p"),
            "open": Argument("string|boolean", "open the browser on startup", placeholder="path"),
            "strictPort": Argument("boolean", "exit if the port is already in use"),
        },
        positionals=Positionals(placeholders=["root"]),
    ),
    "build": Subcommand(
        "build for production",
        arguments={
            "outDir": Argument("string", "output directory", placeholder="dir"),
            "watch": Argument("boolean", "rebuild on changes", short="w"),
        },
        positionals=Positionals(maximum=1, placeholders=["root"]),
    ),
}, default="dev", globals={
    "config": Argument("string", "use the specified config file", short="c"),
    "debug": Argument("string|boolean", "show debug logs", short="d", multiple=True),
}, kebab=True)


if __name__ == '__main__':
    pprint(invoke(vite))
