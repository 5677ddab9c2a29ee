"""Fixed metric identifier catalogs understood by the realtime data endpoint."""

from enum import StrEnum


HOST_METRICS: tuple[str, ...] = (
    "cpu_usage",
    "mem_usage",
    "nic_byte_in",
    "nic_byte_out",
    "disk_io_in",
    "disk_io_out",
    "logic_disk_usage",
    "vm_mem_usage",
    "vm_mem_total",
    "vm_mem_free",
    "vm_run_num",
    "hosts_vio_in",
    "hosts_vio_out",
    "hosts_vbyte_in",
    "hosts_vbyte_out",
)

VM_METRICS: tuple[str, ...] = (
    "cpu_usage",
    "mem_usage",
    "mem_free",
    "disk_usage",
    "nic_byte_in",
    "nic_byte_out",
    "nic_byte_in_out",
    "disk_io_in",
    "disk_io_out",
)


class MetricCatalog(StrEnum):
    HOST = "host"
    VM = "vm"


def metrics_for(catalog: MetricCatalog | str) -> tuple[str, ...]:
    """Return the metric ids requested for the given resource kind."""
    kind = MetricCatalog(catalog)
    if kind is MetricCatalog.VM:
        return VM_METRICS
    return HOST_METRICS
