"""Result models returned by terminal backends.

Field sets mirror what a terminal reports for each query; the command
layer only renders them.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field


class TerminalStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    hardware_model: str = ""
    hardware_revision: str = ""
    firmware_version: str = ""
    terminal_type: str = ""
    timestamp: datetime | None = None
    active_function: str = ""
    powered_on: bool = False
    buffers_full: int = 0
    buffers_faulty: int = 0
    buffers_transmitted: int = 0
    buffers_empty: int = 0
    memory_used: int = Field(default=0, description="Bytes of table memory in use")
    polling_interval: timedelta = timedelta(0)
    transport_type: str = ""
    fingerprint_unit_mode: str = ""
    user_defined_field: str = ""


class HardwareConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    terminal_id: int = 0
    terminal_type: str = ""
    firmware_version: str = ""
    firmware_date: date | None = None
    keyboard_type: str = ""
    display_type: str = ""
    fingerprint_unit_type: str = ""
    fingerprint_unit_mode: str = ""
    host_serial_baud_rate: int = 0
    host_serial_parameters: str = ""
    user_defined_field: str = ""


class NetworkConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    network_card_type: str = ""
    network_card_firmware_version: str = ""
    transport_type: str = ""
    terminal_mac_address: str = ""
    terminal_ip_address: str = ""
    terminal_port: int = 0
    remote_ip_address: str = ""
    remote_port: int = 0
    subnet_mask: str = ""
    gateway_ip_address: str = ""
    disconnect_time: timedelta = timedelta(0)
    polling_interval: timedelta = timedelta(0)
    enable_polling: bool = False
    enable_dhcp: bool = False
    enable_send_mac: bool = False


class FingerprintUnitStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    comparison_mode: str = ""
    kernel_version: str = ""
    loaded_templates: int = 0
    maximum_templates: int = 0
    fingerprint_unit_mode: str = ""
    global_threshold: str = ""
    enroll_mode: str = ""
