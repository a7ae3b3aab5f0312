from __future__ import annotations

from typing import Any

import requests

from lab_panel.config import PanelConfig
from lab_panel.core import script_synth
from lab_panel.core.contracts import Parameter, Script, ScriptDownload
from lab_panel.core.execution import ExecutionClient, LivenessToken
from lab_panel.core.parameters import ParameterStore


class LmsPanel:
    """One LMS equalization panel: parameters, last script, last run.

    Nothing here is shared between instances or persisted.
    """

    def __init__(self, config: PanelConfig, *, session: requests.Session | None = None) -> None:
        self.config = config
        self.store = ParameterStore.from_config(config.parameters)
        self.executor = ExecutionClient(
            config.service, config.placeholder_artifacts, session=session
        )
        self.script: Script | None = None
        self._generated_from: dict[str, float] | None = None
        self._token = LivenessToken()

    def set_value(self, param_id: str, raw_value: Any) -> None:
        self.store.set_value(param_id, raw_value)

    def parameters(self) -> list[Parameter]:
        return self.store.get_all()

    @property
    def display(self) -> str:
        if self.script is None:
            return script_synth.render_display(self.config.script.placeholder_text)
        return self.script.display

    def generate(self) -> Script:
        values = self.store.values()
        self.script = script_synth.generate(values)
        self._generated_from = values
        return self.script

    def script_is_stale(self) -> bool:
        if self._generated_from is None:
            return False
        return self._generated_from != self.store.values()

    def download(self) -> ScriptDownload | None:
        """Return the last generated script as a download, None before generation."""
        if self.script is None:
            return None
        return script_synth.download(self.script, self.config.script.download_name)

    async def run(self) -> None:
        await self.executor.run(self.store.values(), self._token)

    def close(self) -> None:
        self._token.cancel()

    @property
    def closed(self) -> bool:
        return self._token.cancelled
