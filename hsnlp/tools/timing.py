"""Platform-dependent time measurement."""

try:
    # Use resource module if available.
    import resource

    def cputime():
        """Return the user CPU time since the start of the process."""
        return resource.getrusage(resource.RUSAGE_SELF).ru_utime

except ImportError:
    # Windows has no resource module.
    import time

    def cputime():
        """Return the processor time of the current process."""
        return time.process_time()
