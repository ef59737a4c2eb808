import json
import subprocess
import sys
from pathlib import Path

def run(cmd, cwd):
    return subprocess.run(cmd, cwd=cwd, check=False, capture_output=True, text=True)

def test_compile_verify_corrupt(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    projects = tmp_path / "projects"
    cart = tmp_path / "demo.mcart"

    r = run([sys.executable, "tools/make_demo_project.py", str(projects)], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    project = next(projects.glob("project-*"))

    r = run([sys.executable, "-m", "mcart_compile.cli", "build", str(project / "manifest.json"), str(cart)], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    assert cart.exists()

    r = run([sys.executable, "-m", "mcart_verify.cli", "cartridge", str(cart)], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    result = json.loads(r.stdout)
    assert result["status"] == "PASS"
    assert result["cartridge"]["code_banks"] == 2

    r = run([sys.executable, "-m", "mcart_compile.cli", "layout", str(cart), str(tmp_path / "report")], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    assert (tmp_path / "report" / "layout" / "sections.parquet").stat().st_size > 0

    r = run([sys.executable, "-m", "mcart_compile.cli", "bundle", str(cart), str(tmp_path / "bundle")], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    store = tmp_path / "trust_store.json"
    r = run([sys.executable, "-m", "mcart_verify.cli", "bundle", str(tmp_path / "bundle")], cwd=repo)
    assert json.loads(r.stdout)["errors"][0]["code"] == "E_POLICY_TRUST"
    r = run([sys.executable, "-m", "mcart_compile.cli", "trust", str(tmp_path / "bundle"), str(store)], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    r = run([sys.executable, "-m", "mcart_verify.cli", "bundle", str(tmp_path / "bundle"), "--trust-store", str(store)], cwd=repo)
    assert json.loads(r.stdout)["status"] == "PASS"

    # Corrupt and ensure failure
    r = run([sys.executable, "scripts/corrupt_one_byte.py", str(cart)], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    r = run([sys.executable, "-m", "mcart_verify.cli", "cartridge", str(cart)], cwd=repo)
    result = json.loads(r.stdout)
    assert result["status"] == "FAIL"
    assert result["errors"][0]["code"] == "E_FORMAT_MISMATCH"

    r = run([sys.executable, "-m", "mcart_compile.cli", "layout", str(cart), str(tmp_path / "report2")], cwd=repo)
    assert r.returncode != 0
    assert r.stdout.startswith("FATAL:")

def test_numeric_id_generation(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    projects = tmp_path / "projects"
    cart = tmp_path / "demo.mcart"

    r = run([sys.executable, "tools/make_demo_project.py", str(projects), "--numeric-id"], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    project = next(projects.glob("project-*"))

    r = run([sys.executable, "-m", "mcart_compile.cli", "--format-version", "2", "build",
             str(project / "manifest.json"), str(cart)], cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout

    r = run([sys.executable, "-m", "mcart_verify.cli", "--format-version", "2", "cartridge", str(cart)], cwd=repo)
    assert json.loads(r.stdout)["status"] == "PASS"

    r = run([sys.executable, "-m", "mcart_verify.cli", "cartridge", str(cart)], cwd=repo)
    assert json.loads(r.stdout)["errors"][0]["code"] == "E_UNSUPPORTED_VERSION"
