# Copyright 2026 The Kubernetes Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import argparse
import asyncio
import json
import logging
import sys

from kubernetes import config

from .conditions import Result
from .manifests import ManifestError, load_resources
from .object_store import KubernetesObjectStore
from .status import Status

EXIT_READY = 0
EXIT_NOT_READY = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="k8s-readiness",
        description="Report the readiness of the resources in Kubernetes manifests.",
    )
    parser.add_argument("paths", nargs="+", help="Manifest files listing the resources to check.")
    parser.add_argument("-n", "--namespace", default="default",
                        help="Namespace for resources that do not set one.")
    parser.add_argument("--kubeconfig", default=None, help="Path to the kubeconfig file.")
    parser.add_argument("--context", default=None, help="Kubeconfig context to use.")
    parser.add_argument("--concurrency", type=int, default=1,
                        help="Number of resources fetched concurrently (requires the async extra when > 1).")
    parser.add_argument("-o", "--output", choices=["text", "json"], default="text")
    parser.add_argument("--enable-tracing", action="store_true",
                        help="Export OpenTelemetry traces over OTLP.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def format_text(result: Result) -> str:
    lines = []
    for rs in result.resources:
        if rs.error is not None:
            lines.append(f"{rs.resource}  Error  {rs.error}")
            continue
        for condition in rs.conditions:
            lines.append(
                f"{rs.resource}  {condition.type}={condition.status}  {condition.reason}"
            )
    return "\n".join(lines)


def exit_code(result: Result) -> int:
    if result.error is not None:
        return EXIT_ERROR
    if not result.is_ready():
        return EXIT_NOT_READY
    return EXIT_READY


async def _run_async(args, resources) -> Result:
    from kubernetes_asyncio.config import ConfigException as AsyncConfigException

    from .async_status import AsyncKubernetesObjectStore, AsyncStatus

    try:
        async with AsyncKubernetesObjectStore(args.kubeconfig, args.context) as store:
            return await AsyncStatus(
                store,
                resources,
                max_concurrency=args.concurrency,
                enable_tracing=args.enable_tracing,
            ).do()
    except AsyncConfigException as e:
        raise config.ConfigException(str(e)) from e


def run(args) -> Result:
    resources = []
    for path in args.paths:
        resources.extend(load_resources(path, args.namespace))

    if args.concurrency > 1:
        return asyncio.run(_run_async(args, resources))

    store = KubernetesObjectStore(kubeconfig=args.kubeconfig, context=args.context)
    return Status(store, resources, enable_tracing=args.enable_tracing).do()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        result = run(args)
    except (ManifestError, OSError) as e:
        logging.error(f"Could not read manifests: {e}")
        return EXIT_ERROR
    except config.ConfigException as e:
        logging.error(f"Could not load Kubernetes config: {e}")
        return EXIT_ERROR

    if args.output == "json":
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_text(result))
    return exit_code(result)
