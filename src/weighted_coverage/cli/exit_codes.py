# mirror <sysexits.h>
EXIT_OK = 0  # Normal success
EXIT_GENERIC = 1  # Generic failure (fallback)
EXIT_DATAERR = 65  # Input data was invalid (e.g., malformed coverage JSON)
EXIT_NOINPUT = 66  # Input file not found (e.g., coverage JSON or project root missing)
EXIT_IOERR = 74  # Reading the report or writing an output file failed
EXIT_CONFIG = 78  # Invalid configuration (e.g., bad thresholds)
