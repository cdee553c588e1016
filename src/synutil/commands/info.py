"""Information dumps: terminal status, hardware, network and fingerprint unit.

Each dump resets the output target first, so repeated queries into the
same ``-o`` file never concatenate stale data.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from synutil.commands.base import CommandContext, render_fields
from synutil.domain.models import Outcome

logger = logging.getLogger(__name__)


def _seconds(value: timedelta) -> str:
    return f"{value.total_seconds():g} seconds"


def _short_datetime(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else ""


def _short_date(value: date | None) -> str:
    return value.isoformat() if value else ""


async def get_status(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        info = await session.get_terminal_status()

    ctx.sink.reset_target()
    render_fields(ctx.sink, [
        ("Hardware Model", info.hardware_model),
        ("Hardware Revision", info.hardware_revision),
        ("Firmware Version", info.firmware_version),
        ("Terminal Type", info.terminal_type),
        ("Current Time", _short_datetime(info.timestamp)),
        ("Active Function", info.active_function),
        ("Powered On", info.powered_on),
        ("Buffers Full", info.buffers_full),
        ("Buffers Faulty", info.buffers_faulty),
        ("Buffers Transmitted", info.buffers_transmitted),
        ("Buffers Empty", info.buffers_empty),
        ("Memory Used", f"{info.memory_used} bytes"),
        ("Polling Interval", _seconds(info.polling_interval)),
        ("Transport Type", info.transport_type.upper()),
        ("FPU Mode", info.fingerprint_unit_mode),
        ("User Defined Field", info.user_defined_field),
    ])
    return Outcome.success()


async def get_hardware_info(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        info = await session.get_hardware_configuration()

    ctx.sink.reset_target()
    render_fields(ctx.sink, [
        ("Terminal ID", info.terminal_id),
        ("Terminal Type", info.terminal_type),
        ("Firmware Version", f"{info.firmware_version} ({_short_date(info.firmware_date)})"),
        ("Keyboard Type", info.keyboard_type),
        ("Display Type", info.display_type),
        ("FPU Type", info.fingerprint_unit_type),
        ("FPU Mode", info.fingerprint_unit_mode),
        ("Serial Port Info", f"{info.host_serial_baud_rate} {info.host_serial_parameters.upper()}"),
        ("User Defined Field", info.user_defined_field),
    ])
    return Outcome.success()


async def get_network_info(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        info = await session.get_network_configuration()

    ctx.sink.reset_target()
    render_fields(ctx.sink, [
        ("Network Card", f"{info.network_card_type} (ver {info.network_card_firmware_version})"),
        ("Transport Type", info.transport_type.upper()),
        ("MAC Address", info.terminal_mac_address),
        ("IP Address/Port", f"{info.terminal_ip_address}:{info.terminal_port}"),
        ("Remote Address/Port", f"{info.remote_ip_address}:{info.remote_port}"),
        ("Subnet Mask", info.subnet_mask),
        ("Gateway Address", info.gateway_ip_address),
        ("Disconnect Time", _seconds(info.disconnect_time)),
        ("Polling Interval", _seconds(info.polling_interval)),
        ("Polling Enabled", info.enable_polling),
        ("DHCP Enabled", info.enable_dhcp),
        ("MAC Sending Enabled", info.enable_send_mac),
    ])
    return Outcome.success()


async def get_fingerprint_info(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        async with ctx.sessions.programming(session) as programming:
            status = await programming.get_fingerprint_unit_status()

    ctx.sink.reset_target()
    render_fields(ctx.sink, [
        ("Comparison Mode", status.comparison_mode),
        ("Kernel Version", status.kernel_version),
        ("Loaded Templates", status.loaded_templates),
        ("Maximum Templates", status.maximum_templates),
        ("FPU Mode", status.fingerprint_unit_mode),
        ("Global Threshold", status.global_threshold),
        ("Enroll Mode", status.enroll_mode),
    ], width=19)
    return Outcome.success()
