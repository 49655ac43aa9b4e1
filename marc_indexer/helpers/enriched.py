"""
Tags and subfield codes for the fields Alma adds to a bibliographic record when it is exported. There are
two sources: the publishing profile that generates the MARCXML ("Pub"), and the Bibs API when it is asked
to expand availability ("Api"). They carry the same kinds of information in different places.

See: https://developers.exlibrisgroup.com/alma/apis/docs/bibs/R0VUIC9hbG1hd3MvdjEvYmlicy97bW1zX2lkfQ==/
"""

# Publishing profile tags
PUB_PHYS_INVENTORY_TAG: str = "hld"
PUB_ELEC_INVENTORY_TAG: str = "prt"
PUB_ITEM_TAG: str = "itm"
PUB_RELATED_RECORD_TAGS: tuple = ("REL", "rel")

# hld subfields; these follow the MARC holdings 852.
PUB_PHYS_LOCATION_NAME: str = "b"
PUB_PHYS_LOCATION_CODE: str = "c"
PUB_HOLDING_CLASSIFICATION_PART: str = "h"
PUB_HOLDING_ITEM_PART: str = "i"
PUB_PHYS_PUBLIC_NOTE: str = "z"
PUB_PHYS_INTERNAL_NOTE: str = "x"
PUB_PHYS_HOLDING_ID: str = "8"

# itm subfields
PUB_ITEM_CURRENT_LOCATION: str = "g"
PUB_ITEM_CALL_NUMBER_TYPE: str = "h"
PUB_ITEM_CALL_NUMBER: str = "i"
PUB_ITEM_DATE_CREATED: str = "q"

# prt subfields
PUB_ELEC_PORTFOLIO_ID: str = "a"
PUB_ELEC_SERVICE_URL: str = "b"
PUB_ELEC_COLLECTION_NAME: str = "c"
PUB_ELEC_INTERFACE_NAME: str = "e"
PUB_ELEC_PUBLIC_NOTE: str = "f"
PUB_ELEC_COVERAGE_STMT: str = "g"

# API tags
API_PHYS_INVENTORY_TAG: str = "AVA"
API_ELEC_INVENTORY_TAG: str = "AVE"

# AVA subfields
API_PHYS_CALL_NUMBER: str = "d"
API_PHYS_CALL_NUMBER_TYPE: str = "k"
API_PHYS_LIBRARY_CODE: str = "b"
API_PHYS_LIBRARY_NAME: str = "q"
API_PHYS_LOCATION_CODE: str = "j"
API_PHYS_LOCATION_NAME: str = "c"
API_PHYS_HOLDING_ID: str = "8"
API_PHYS_AVAILABILITY: str = "e"
API_PHYS_TOTAL_ITEMS: str = "f"
API_PHYS_UNAVAILABLE_ITEMS: str = "g"
API_PHYS_SUMMARY_INFO: str = "v"
API_PHYS_PRIORITY: str = "p"

# AVE subfields
API_ELEC_LIBRARY_CODE: str = "l"
API_ELEC_COLLECTION_NAME: str = "m"
API_ELEC_PUBLIC_NOTE: str = "n"
API_ELEC_SERVICE_URL: str = "u"
API_ELEC_COVERAGE_STMT: str = "s"
API_ELEC_INTERFACE_NAME: str = "t"
API_ELEC_PORTFOLIO_ID: str = "8"
API_ELEC_COLLECTION_ID: str = "c"
API_ELEC_ACTIVATION_STATUS: str = "e"

PHYS_INVENTORY_TAGS: tuple = (PUB_PHYS_INVENTORY_TAG, API_PHYS_INVENTORY_TAG)
ELEC_INVENTORY_TAGS: tuple = (PUB_ELEC_INVENTORY_TAG, API_ELEC_INVENTORY_TAG)
