"""Maximum lengths of user text fields.

The ``users`` table sizes its columns from these values, so a value the
domain accepts always fits its column.
"""

EMAIL_MAX_LENGTH = 255
NAME_MAX_LENGTH = 50
PHONE_MAX_LENGTH = 32
PINCODE_LENGTH = 6

EMPLOYEE_ID_MAX_LENGTH = 64
DEPARTMENT_MAX_LENGTH = 100
AREA_NAME_MAX_LENGTH = 255

STREET_MAX_LENGTH = 255
CITY_MAX_LENGTH = 100
STATE_MAX_LENGTH = 100
