"""Property names, default file names and provenance strings."""

# Environment variable naming an override configuration file or resource
PROPERTIES_FILE = "STDSCHED_PROPERTIES_FILE"

DEFAULT_PROPERTIES_FILE = "stdsched.properties"

# Bundled default resource: plain, root-anchored and packaged lookup names
DEFAULT_RESOURCE_CANDIDATES = (
    "stdsched.properties",
    "/stdsched.properties",
    "stdsched/stdsched.properties",
)

PROP_SCHED_PREFIX = "stdsched.scheduler"
PROP_SCHED_INSTANCE_NAME = "stdsched.scheduler.instanceName"
PROP_SCHED_INSTANCE_ID = "stdsched.scheduler.instanceId"
PROP_SCHED_THREAD_NAME = "stdsched.scheduler.threadName"
PROP_SCHED_MAKE_SCHEDULER_THREAD_DAEMON = "stdsched.scheduler.makeSchedulerThreadDaemon"
PROP_SCHED_INTERRUPT_JOBS_ON_SHUTDOWN = "stdsched.scheduler.interruptJobsOnShutdown"
PROP_SCHED_IDLE_WAIT_TIME = "stdsched.scheduler.idleWaitTime"
PROP_SCHED_CONTEXT_PREFIX = "stdsched.context.key"

PROP_LOGGING_PREFIX = "stdsched.logging"

DEFAULT_INSTANCE_NAME = "StdScheduler"
DEFAULT_INSTANCE_ID = "NON_CLUSTERED"
AUTO_GENERATE_INSTANCE_ID = "AUTO"

# Provenance reported by ConfigurationResolver.property_source
SOURCE_SPECIFIED_FILE = "specified file: '{name}'"
SOURCE_SPECIFIED_RESOURCE = "specified file: '{name}' in the class resource path."
SOURCE_WORKING_DIR_FILE = f"default file in current working dir: '{DEFAULT_PROPERTIES_FILE}'"
SOURCE_DEFAULT_RESOURCE = f"default resource file in stdsched package: '{DEFAULT_PROPERTIES_FILE}'"
SOURCE_NAMED_RESOURCE = "the specified file : '{name}' from the class resource path."
SOURCE_NAMED_FILE = "the specified file : '{name}'"
SOURCE_STREAM = "an externally opened InputStream."
SOURCE_PROPERTIES = "an externally provided properties instance."
