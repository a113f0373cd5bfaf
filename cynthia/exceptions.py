"""
Custom Exception Classes for Cynthia

This module defines the exceptions raised while loading site files,
running plugins and assembling pages. Only the fatal asset errors are
meant to reach the HTTP layer; plugin errors are absorbed by the hook
dispatcher and the command protocol.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes included in error responses."""

    # Site assets
    ASSET_NOT_FOUND = "ASSET_NOT_FOUND"
    TEMPLATE_RENDER_FAILED = "TEMPLATE_RENDER_FAILED"
    MODE_NOT_FOUND = "MODE_NOT_FOUND"
    METADATA_UNREADABLE = "METADATA_UNREADABLE"

    # Plugins
    PLUGIN_PROTOCOL_ERROR = "PLUGIN_PROTOCOL_ERROR"
    PLUGIN_SCRIPT_FAILED = "PLUGIN_SCRIPT_FAILED"
    PLUGIN_SCRIPT_TIMEOUT = "PLUGIN_SCRIPT_TIMEOUT"

    # Routing and generic
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class CynthiaError(Exception):
    """Base exception class for all Cynthia exceptions"""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Site Asset Exceptions
# ============================================================================


class AssetNotFoundError(CynthiaError):
    """Raised when a file required to assemble a page is missing"""

    error_code = ErrorCode.ASSET_NOT_FOUND

    def __init__(self, asset_type: str, path: str):
        super().__init__(
            message=f"Could not load {asset_type} at '{path}'",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"asset_type": asset_type, "path": path},
        )


class TemplateRenderError(CynthiaError):
    """Raised when a page template fails to render"""

    error_code = ErrorCode.TEMPLATE_RENDER_FAILED

    def __init__(self, template: str, reason: str):
        super().__init__(
            message=f"Template '{template}' failed to render: {reason}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"template": template},
        )


class ModeNotFoundError(CynthiaError):
    """Raised when neither the requested mode nor the default mode can be loaded"""

    error_code = ErrorCode.MODE_NOT_FOUND

    def __init__(self, mode_name: str, reason: str | None = None):
        message = f"Mode '{mode_name}' could not be loaded"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"mode": mode_name},
        )


class MetadataStoreError(CynthiaError):
    """Raised when the published page metadata cannot be parsed"""

    error_code = ErrorCode.METADATA_UNREADABLE

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Could not interpret page metadata at '{path}': {reason}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"path": path},
        )


# ============================================================================
# Plugin Exceptions
# ============================================================================


class CommandProtocolError(CynthiaError):
    """Raised when a hook template does not produce a valid command list"""

    error_code = ErrorCode.PLUGIN_PROTOCOL_ERROR

    def __init__(self, message: str, plugin: str | None = None):
        details = {"plugin": plugin} if plugin else {}
        super().__init__(message=message, status_code=status.HTTP_502_BAD_GATEWAY, details=details)


class ScriptRunnerError(CynthiaError):
    """Raised when a plugin script cannot be run or exits unsuccessfully"""

    error_code = ErrorCode.PLUGIN_SCRIPT_FAILED

    def __init__(self, message: str, working_directory: str | None = None, stderr: str | None = None):
        details: dict[str, Any] = {}
        if working_directory:
            details["working_directory"] = working_directory
        if stderr:
            details["stderr"] = stderr
        super().__init__(message=message, status_code=status.HTTP_502_BAD_GATEWAY, details=details)


class ScriptTimeoutError(ScriptRunnerError):
    """Raised when a plugin script exceeds its execution budget"""

    error_code = ErrorCode.PLUGIN_SCRIPT_TIMEOUT

    def __init__(self, timeout: float, working_directory: str | None = None):
        super().__init__(
            message=f"Plugin script did not finish within {timeout:g} seconds",
            working_directory=working_directory,
        )
        self.timeout = timeout
