# API Route Constants

# Base API
API_BASE = '/api'

# Trip routes
TRIP_BASE = f'{API_BASE}/trip'
TRIP_GET = f'{TRIP_BASE}/{{trip_id}}'
TRIP_START_BOARDING = f'{TRIP_BASE}/{{trip_id}}/start_boarding'
TRIP_DEPART = f'{TRIP_BASE}/{{trip_id}}/depart'
TRIP_ARRIVE = f'{TRIP_BASE}/{{trip_id}}/arrive'
TRIP_CANCEL = f'{TRIP_BASE}/{{trip_id}}/cancel'
TRIP_PASSENGERS = f'{TRIP_BASE}/{{trip_id}}/passengers'
TRIP_BOARDING_STATS = f'{TRIP_BASE}/{{trip_id}}/boarding_stats'
TRIP_LIVE = f'{TRIP_BASE}/{{trip_id}}/live'

# Reservation routes
TRIP_CLAIM = f'{TRIP_BASE}/{{trip_id}}/claim'
TRIP_OCCUPIED_SEATS = f'{TRIP_BASE}/{{trip_id}}/occupied_seats'
TRIP_SEAT_MAP = f'{TRIP_BASE}/{{trip_id}}/seat_map'
CLAIM_BASE = f'{API_BASE}/claim'
CLAIM_CONFIRM = f'{CLAIM_BASE}/{{token}}/confirm'
CLAIM_RELEASE = f'{CLAIM_BASE}/{{token}}'
BOOKING_CANCEL = f'{API_BASE}/booking/{{booking_id}}/cancel'

# Boarding routes
TRIP_CHECK_IN = f'{TRIP_BASE}/{{trip_id}}/booking/{{booking_id}}/check_in'
TRIP_BOARDING = f'{TRIP_BASE}/{{trip_id}}/boarding'

# Common
HEALTH = '/health'
METRICS = '/metrics'
