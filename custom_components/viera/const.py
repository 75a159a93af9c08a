"""Constants for Panasonic Viera TV integration."""

from homeassistant.const import Platform

DOMAIN = "viera"

CONF_HOST = "host"
CONF_APP_ID = "app_id"
CONF_ENCRYPTION_KEY = "encryption_key"

ATTR_APP_ID = "app_id"
SERVICE_LAUNCH_APP = "launch_app"

DEFAULT_NAME = "Panasonic Viera TV"
DEFAULT_POLL_INTERVAL = 10
DEFAULT_TIMEOUT = 10.0

# Platforms supported by this integration
PLATFORMS: list[Platform] = [
    Platform.MEDIA_PLAYER,
    Platform.REMOTE,
]

# SOAP core constants
DEFAULT_PORT = 55000
URN_RENDERING_CONTROL = "schemas-upnp-org:service:RenderingControl:1"
URN_REMOTE_CONTROL = "panasonic-com:service:p00NetworkControl:1"
URL_CONTROL_DMR = "/dmr/control_0"
URL_CONTROL_NRC = "/nrc/control_0"
SOAP_PREFIX = "u"

# Actions sent in the clear even on an encrypted session
ACTION_GET_SESSION_ID = "X_GetEncryptSessionId"
ACTION_DISPLAY_PIN_CODE = "X_DisplayPinCode"
ACTION_REQUEST_AUTH = "X_RequestAuth"
ACTION_ENCRYPTED_COMMAND = "X_EncryptedCommand"
BOOTSTRAP_ACTIONS = frozenset(
    {ACTION_GET_SESSION_ID, ACTION_DISPLAY_PIN_CODE, ACTION_REQUEST_AUTH}
)

# Remote control key codes (NRC = network remote control)
VIERA_KEYS: dict[str, str] = {
    "thirty_second_skip": "NRC_30S_SKIP-ONOFF",
    "toggle_3d": "NRC_3D-ONOFF",
    "apps": "NRC_APPS-ONOFF",
    "aspect": "NRC_ASPECT-ONOFF",
    "back": "NRC_RETURN-ONOFF",
    "blue": "NRC_BLUE-ONOFF",
    "cancel": "NRC_CANCEL-ONOFF",
    "cc": "NRC_CC-ONOFF",
    "chat_mode": "NRC_CHAT_MODE-ONOFF",
    "ch_down": "NRC_CH_DOWN-ONOFF",
    "input_key": "NRC_CHG_INPUT-ONOFF",
    "network": "NRC_CHG_NETWORK-ONOFF",
    "ch_up": "NRC_CH_UP-ONOFF",
    "num_0": "NRC_D0-ONOFF",
    "num_1": "NRC_D1-ONOFF",
    "num_2": "NRC_D2-ONOFF",
    "num_3": "NRC_D3-ONOFF",
    "num_4": "NRC_D4-ONOFF",
    "num_5": "NRC_D5-ONOFF",
    "num_6": "NRC_D6-ONOFF",
    "num_7": "NRC_D7-ONOFF",
    "num_8": "NRC_D8-ONOFF",
    "num_9": "NRC_D9-ONOFF",
    "diga_control": "NRC_DIGA_CTL-ONOFF",
    "display": "NRC_DISP_MODE-ONOFF",
    "down": "NRC_DOWN-ONOFF",
    "enter": "NRC_ENTER-ONOFF",
    "epg": "NRC_EPG-ONOFF",
    "exit": "NRC_CANCEL-ONOFF",
    "ez_sync": "NRC_EZ_SYNC-ONOFF",
    "favorite": "NRC_FAVORITE-ONOFF",
    "fast_forward": "NRC_FF-ONOFF",
    "game": "NRC_GAME-ONOFF",
    "green": "NRC_GREEN-ONOFF",
    "guide": "NRC_GUIDE-ONOFF",
    "hold": "NRC_HOLD-ONOFF",
    "home": "NRC_HOME-ONOFF",
    "index": "NRC_INDEX-ONOFF",
    "info": "NRC_INFO-ONOFF",
    "connect": "NRC_INTERNET-ONOFF",
    "left": "NRC_LEFT-ONOFF",
    "menu": "NRC_MENU-ONOFF",
    "mpx": "NRC_MPX-ONOFF",
    "mute": "NRC_MUTE-ONOFF",
    "net_bs": "NRC_NET_BS-ONOFF",
    "net_cs": "NRC_NET_CS-ONOFF",
    "net_td": "NRC_NET_TD-ONOFF",
    "off_timer": "NRC_OFFTIMER-ONOFF",
    "pause": "NRC_PAUSE-ONOFF",
    "pictai": "NRC_PICTAI-ONOFF",
    "play": "NRC_PLAY-ONOFF",
    "p_nr": "NRC_P_NR-ONOFF",
    "power": "NRC_POWER-ONOFF",
    "program": "NRC_PROG-ONOFF",
    "record": "NRC_REC-ONOFF",
    "red": "NRC_RED-ONOFF",
    "return_key": "NRC_RETURN-ONOFF",
    "rewind": "NRC_REW-ONOFF",
    "right": "NRC_RIGHT-ONOFF",
    "r_screen": "NRC_R_SCREEN-ONOFF",
    "last_view": "NRC_R_TUNE-ONOFF",
    "sap": "NRC_SAP-ONOFF",
    "toggle_sd_card": "NRC_SD_CARD-ONOFF",
    "skip_next": "NRC_SKIP_NEXT-ONOFF",
    "skip_prev": "NRC_SKIP_PREV-ONOFF",
    "split": "NRC_SPLIT-ONOFF",
    "stop": "NRC_STOP-ONOFF",
    "subtitles": "NRC_STTL-ONOFF",
    "option": "NRC_SUBMENU-ONOFF",
    "surround": "NRC_SURROUND-ONOFF",
    "swap": "NRC_SWAP-ONOFF",
    "text": "NRC_TEXT-ONOFF",
    "tv": "NRC_TV-ONOFF",
    "up": "NRC_UP-ONOFF",
    "link": "NRC_VIERA_LINK-ONOFF",
    "volume_down": "NRC_VOLDOWN-ONOFF",
    "volume_up": "NRC_VOLUP-ONOFF",
    "vtools": "NRC_VTOOLS-ONOFF",
    "yellow": "NRC_YELLOW-ONOFF",
}

# Number of HDMI inputs exposed as media player sources
HDMI_INPUTS = 4
