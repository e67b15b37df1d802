"""
Command-line entry point for the IoT registry.

    iot-registry [--backend sqlite] [--uri iot_registry.db] COMMAND ...

Commands:
    init                                  seed genesis records
    hash store RAW                        register digest of RAW
    hash verify RAW                       report whether digest of RAW exists
    hash exists HASH | read HASH | list
    asset create ID CLOUD EMPREINTE MAC FABRICANT
    asset exists ID | read ID | list
    asset find (--mac MAC | --empreinte FP | --attr NAME VALUE)

Results are printed as JSON on stdout. Registry errors go to stderr with
exit status 1.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional, Sequence

from .config import STORE_BACKENDS, load_config
from .core import RegistryService
from .errors import RegistryError
from .models import RECORD_TYPES


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, RECORD_TYPES):
        return value.to_dict()
    if isinstance(value, bytes):
        # Undecodable store values are shown as their raw text.
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    return value


def _emit(value: Any) -> None:
    print(json.dumps(_to_jsonable(value), ensure_ascii=False, sort_keys=True))


def build_parser() -> argparse.ArgumentParser:
    defaults = load_config()

    ap = argparse.ArgumentParser(
        prog="iot-registry",
        description="Deterministic IoT asset and fingerprint registry",
    )
    ap.add_argument("--backend", choices=STORE_BACKENDS, default=defaults.store_backend)
    ap.add_argument("--uri", default=defaults.store_uri)
    ap.add_argument("--log", action="store_true", default=defaults.enable_logging)

    sub = ap.add_subparsers(dest="group", required=True)

    sub.add_parser("init", help="seed genesis records")

    # hash registry
    hp = sub.add_parser("hash", help="fingerprint / MAC hash registry")
    hsub = hp.add_subparsers(dest="command", required=True)
    for name in ("store", "verify"):
        p = hsub.add_parser(name)
        p.add_argument("raw")
    for name in ("exists", "read"):
        p = hsub.add_parser(name)
        p.add_argument("hash")
    hsub.add_parser("list")

    # asset registry
    ap_asset = sub.add_parser("asset", help="IoT asset registry")
    asub = ap_asset.add_subparsers(dest="command", required=True)
    p = asub.add_parser("create")
    p.add_argument("id")
    p.add_argument("id_cloud_provider")
    p.add_argument("empreinte_radio")
    p.add_argument("adresse_mac")
    p.add_argument("id_fabricant")
    for name in ("exists", "read"):
        p = asub.add_parser(name)
        p.add_argument("id")
    asub.add_parser("list")
    p = asub.add_parser("find")
    group = p.add_mutually_exclusive_group(required=True)
    group.add_argument("--mac")
    group.add_argument("--empreinte")
    group.add_argument("--attr", nargs=2, metavar=("NAME", "VALUE"))

    return ap


def _run_hash(service: RegistryService, args: argparse.Namespace) -> Any:
    reg = service.hashes
    if args.command == "store":
        return reg.store_hash(args.raw)
    if args.command == "verify":
        result = reg.verify_result(args.raw)
        return {"digest": result.digest, "matched": result.matched, "message": result.message}
    if args.command == "exists":
        return reg.exists(args.hash)
    if args.command == "read":
        return reg.read(args.hash)
    return reg.list_all()


def _run_asset(service: RegistryService, args: argparse.Namespace) -> Any:
    reg = service.assets
    if args.command == "create":
        return reg.create_asset(
            args.id,
            args.id_cloud_provider,
            args.empreinte_radio,
            args.adresse_mac,
            args.id_fabricant,
        )
    if args.command == "exists":
        return reg.exists(args.id)
    if args.command == "read":
        return reg.read(args.id)
    if args.command == "find":
        if args.mac is not None:
            return reg.read_by_mac(args.mac)
        if args.empreinte is not None:
            return reg.read_by_empreinte(args.empreinte)
        name, value = args.attr
        return reg.find_by_attribute(name, value)
    return reg.list_all()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = load_config()
    cfg.store_backend = args.backend
    cfg.store_uri = args.uri
    cfg.enable_logging = args.log

    try:
        service = RegistryService.from_config(cfg)
    except (ValueError, RegistryError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        if args.group == "init":
            seeded = service.initialize()
            result: Any = {ns: [r.key for r in recs] for ns, recs in seeded.items()}
        elif args.group == "hash":
            result = _run_hash(service, args)
        else:
            result = _run_asset(service, args)
    except RegistryError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        service.close()

    _emit(result)
    return 0


__all__ = ["build_parser", "main"]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
