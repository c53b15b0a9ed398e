from __future__ import annotations

import os
import sys
from typing import List, Optional

from dme.lib.logger import get_logger
from dme.service.pipeline_service import PipelineService
from dme.service.settings_service import EnvSettings

from dotenv import load_dotenv
load_dotenv()


def _as_bool(v: object, default: bool = False) -> bool:
    if v is None:
        return default
    return str(v).lower() in ("1", "true", "yes")


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    serve = _as_bool(os.getenv("SERVE", "0"))
    if serve and not args:
        # Run HTTP server; host/port from env
        import uvicorn
        host = os.getenv("DOMAIN", "0.0.0.0")
        port = int(os.getenv("PORT", "8080"))
        uvicorn.run("dme.transport.http.server:create_app", factory=True, host=host, port=port, reload=False)
        return 0

    if len(args) > 2:
        print("Usage: python main.py [note_file] [endpoint]  # or set SERVE=1 to start HTTP server", flush=True)
        return 2

    logger = get_logger("main")
    settings = EnvSettings()
    file_path = args[0] if args else settings.get("DEFAULT_INPUT_FILE")
    endpoint = args[1] if len(args) > 1 else settings.get("API_ENDPOINT")
    logger.info("input file: %s; endpoint: %s", file_path, endpoint or "-")

    try:
        pipeline = PipelineService(settings)
        submit = settings.get_bool("SUBMIT", True) and bool(endpoint)
        data = pipeline.process_file(file_path, endpoint=endpoint, submit=submit)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1
    except Exception:
        logger.exception("fatal error during DME extraction")
        return 1

    print("\n=== Extracted DME Data ===")
    print(pipeline.serializer.serialize(data.result, indent=2))
    print("==========================\n", flush=True)

    if data.submitted is False:
        logger.error("failed to submit DME data to %s", endpoint)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
