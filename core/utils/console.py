from rich.console import Console

from core.config import Config

console = Console(
    force_terminal=True,
    color_system="truecolor",
    stderr=True,
    highlight=False,
    soft_wrap=True,
)

def info(msg): console.print(f"ℹ️  {msg}", style="blue", markup=False)
def error(msg): console.print(f"❌ {msg}", style="red", markup=False)

def debug(msg):
    if Config.DEBUG:
        console.print(f"🔍 {msg}", style="dim", markup=False)
