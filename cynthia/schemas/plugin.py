from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PluginHookConfig(BaseModel):
    """A runner entry of a plugin manifest: which runner, and the command template."""

    type: str
    execute: str


class PluginRunners(BaseModel):
    modify_body_html: Optional[PluginHookConfig] = Field(None, alias="modifyBodyHTML")
    modify_head_html: Optional[PluginHookConfig] = Field(None, alias="modifyHeadHTML")
    modify_output_html: Optional[PluginHookConfig] = Field(None, alias="modifyOutputHTML")
    plugin_child_execute: Optional[PluginHookConfig] = Field(None, alias="pluginChildExecute")
    hostedfolders: Optional[list[list[str]]] = None

    model_config = ConfigDict(populate_by_name=True)


class PluginManifest(BaseModel):
    """Contents of plugins/<dir>/cynthia-plugin.json."""

    compat: str = Field("", alias="CyntiaPluginCompat")
    name: Optional[str] = None
    runners: PluginRunners = Field(default_factory=PluginRunners)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
