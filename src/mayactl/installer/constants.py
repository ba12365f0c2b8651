"""Fixed locations used by the install sequence"""

BOOTSTRAP_SCRIPT_URL = "https://raw.githubusercontent.com/openebs/maya/master/scripts/install_bootstrap.sh"

# Downloaded into the working directory and removed after it runs
BOOTSTRAP_SCRIPT = "install_bootstrap.sh"

MAYA_SCRIPTS_PATH = "/etc/maya.d/scripts"

INSTALL_CONSUL_SCRIPT = f"{MAYA_SCRIPTS_PATH}/install_consul.sh"
GET_PRIVATE_IP_SCRIPT = f"{MAYA_SCRIPTS_PATH}/get_first_private_ip.sh"
SET_CONSUL_AS_SERVER_SCRIPT = f"{MAYA_SCRIPTS_PATH}/set_consul_as_server.sh"
START_CONSUL_SERVER_SCRIPT = f"{MAYA_SCRIPTS_PATH}/start_consul_server.sh"
