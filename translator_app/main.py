from __future__ import annotations

import os
import sys

from translator_app.app import TranslatorApp
from translator_app import telemetry


def main() -> None:
    reset_flag = os.environ.pop("TRANSLATOR_LOG_RESET", "").strip()
    telemetry.setup(reset=reset_flag != "0")
    telemetry.log_event("main.start")
    app = TranslatorApp()
    exit_code = app.run(sys.argv)
    telemetry.log_event("main.exit", code=exit_code)
    telemetry.shutdown()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
