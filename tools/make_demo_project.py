import json
import random
import uuid
from pathlib import Path

# Stock profile sizes; keep in sync with mcart_core.profile.DEFAULT_PROFILE
CODE_BANK = 0x2000
ATLAS_SPRITE = 32
CONTROLLER_GRAPHICS_BANK = 0x200


def random_bytes(n: int) -> bytes:
    return bytes(random.getrandbits(8) for _ in range(n))


def generate_project(output_dir: str, code_banks: int = 2, atlases: int = 1, numeric_id: bool = False) -> Path:
    project_id = str(uuid.uuid4())
    out = Path(output_dir) / f"project-{project_id[:8]}"
    out.mkdir(parents=True, exist_ok=True)

    # 1. Main code (shorter than a bank; the compiler pads it)
    (out / "main.bin").write_bytes(random_bytes(random.randint(16, CODE_BANK)))

    # 2. Extra code banks
    code_files = []
    for i in range(code_banks):
        name = f"bank{i}.bin"
        (out / name).write_bytes(random_bytes(CODE_BANK))
        code_files.append(name)

    # 3. Atlases: whole sprites only
    atlas_files = []
    for i in range(atlases):
        name = f"atlas{i}.bin"
        (out / name).write_bytes(random_bytes(ATLAS_SPRITE * random.randint(1, 16)))
        atlas_files.append(name)

    # 4. One custom controller graphic; the rest are blank
    (out / "controller0.bin").write_bytes(random_bytes(CONTROLLER_GRAPHICS_BANK))

    manifest = {
        "id": random.randint(1, 0xFFFF) if numeric_id else f"com.example.demo{project_id[:4]}",
        "name": "Demo Game",
        "author": "Demo Author",
        "version": "1.0.0",
        "build": random.randint(1, 500),
        "main_code": "main.bin",
        "min_console_version": 1,
        "target_console_version": 16,
        "code_files": code_files,
        "atlas_files": atlas_files,
        "ram_banks": random.randint(0, 4),
    }
    if not numeric_id:
        manifest["controller_graphics_files"] = ["controller0.bin"]

    (out / "manifest.json").write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    print(f"GENERATED: {out}")
    return out

if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/make_demo_project.py OUT_DIR [--runs N] [--numeric-id]

    args = [a for a in sys.argv[1:] if a]

    def pop_flag(arg_list: list[str], flag: str) -> tuple[bool, list[str]]:
        """Remove a boolean flag from an argv-style list."""
        if flag in arg_list:
            return True, [a for a in arg_list if a != flag]
        return False, arg_list

    numeric_id, args = pop_flag(args, "--numeric-id")

    runs = 1
    if "--runs" in args:
        i = args.index("--runs")
        if i + 1 >= len(args):
            raise SystemExit("--runs requires a value")
        runs = int(args[i + 1])
        args = args[:i] + args[i + 2:]

    out = args[0] if len(args) > 0 else "demo_projects"
    for _ in range(runs):
        generate_project(out, numeric_id=numeric_id)
