"""
Curated educational channels, found via the random channel generator.
Used when the configuration does not provide its own list.
"""

KNOWN_CHANNELS = [
    "UC4a-Gbdw7vOaccHmFo40b9g", "UCYO_jab_esuFRV4b17AJtAw", "UCBcljXmuXPok9kT_VGA3adg", "UCJDIGW0ywWw9Kh9_vtwqxXA",
    "UCEBb1b_L6zDS3xTUrIALZOw", "UCoHhuummRZaIVX7bD4t2czg", "UC9-y-6csu5WGm29I7JiwpnA", "UC5029sGTV3cQWk9gh90X6-Q",
    "UC2Few2jF7zWvuxtXgoyat8g", "UCcF_QqLWOatOO5vHHlzK_Hw", "UCq0EGvLTyy-LLT1oUSO_0FQ", "UCoxcjq-8xIDTYp3uz647V5A",
    "UCLv7Gzc3VTO6ggFlXY0sOyw", "UC4EY_qnSeAP1xGsh61eOoJA", "UCmdTJKCLBVMQdPC3_kE7t1w", "UCLnGGRG__uGSPLBLzyhg8dQ",
    "UC-EnprmCZ3OXyAoG7vjVNCA", "UCYgL81lc7DOLNhnel1_J6Vg", "UCThyZpUXvT1atGZ0P1-2Vng", "UCIJ7ElhHMlz9lKh8_-dh4rA",
    "UC4XB8AQCiucZ7324-UaYA4A", "UC6KD6HqLbd24LOI26GeHeWw", "UCiEHVhv0SBMpP75JbzJShqw", "UCngehmCV-65FikHYUV1_qXA",
    "UCMWg8e_4hC6p5abek1VGuMw", "UCIuFVDoogw9ujgLbpTCM3sQ", "UCL9No2CVecC_8WazyduwHaw", "UCCabJxhy6wokraEGgFcYD5g",
    "UCC4FftDQK5gj4Ru2MgvraTw", "UCshPTHWDVDFPT3J-V2xBGRA", "UCxjYJHqLxAyMI0jHEbUnNtg", "UC3g-w83Cb5pEAu5UmRrge-A",
]
