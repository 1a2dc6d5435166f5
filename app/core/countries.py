"""
Country dialling data used to validate phone numbers entered with a country.

national_length is the number of digits expected after the country code.
"""

from typing import List, NamedTuple, Optional


class Country(NamedTuple):
    name: str
    code: str
    phone_code: str
    national_length: int


COUNTRIES: List[Country] = [
    Country("Afghanistan", "AF", "+93", 9),
    Country("Albania", "AL", "+355", 9),
    Country("Algeria", "DZ", "+213", 9),
    Country("American Samoa", "AS", "+1", 10),
    Country("Andorra", "AD", "+376", 9),
    Country("Angola", "AO", "+244", 9),
    Country("Anguilla", "AI", "+1", 10),
    Country("Antigua and Barbuda", "AG", "+1", 10),
    Country("Argentina", "AR", "+54", 10),
    Country("Armenia", "AM", "+374", 8),
    Country("Aruba", "AW", "+297", 7),
    Country("Australia", "AU", "+61", 9),
    Country("Austria", "AT", "+43", 13),
    Country("Azerbaijan", "AZ", "+994", 9),
    Country("Bahamas", "BS", "+1", 10),
    Country("Bahrain", "BH", "+973", 8),
    Country("Bangladesh", "BD", "+880", 10),
    Country("Barbados", "BB", "+1", 10),
    Country("Belarus", "BY", "+375", 9),
    Country("Belgium", "BE", "+32", 9),
    Country("Belize", "BZ", "+501", 7),
    Country("Benin", "BJ", "+229", 8),
    Country("Bermuda", "BM", "+1", 10),
    Country("Bhutan", "BT", "+975", 8),
    Country("Bolivia", "BO", "+591", 8),
    Country("Bosnia and Herzegovina", "BA", "+387", 9),
    Country("Botswana", "BW", "+267", 8),
    Country("Brazil", "BR", "+55", 11),
    Country("British Indian Ocean Territory", "IO", "+246", 7),
    Country("British Virgin Islands", "VG", "+1", 10),
    Country("Brunei", "BN", "+673", 7),
    Country("Bulgaria", "BG", "+359", 9),
    Country("Burkina Faso", "BF", "+226", 8),
    Country("Burundi", "BI", "+257", 8),
    Country("Cambodia", "KH", "+855", 9),
    Country("Cameroon", "CM", "+237", 9),
    Country("Canada", "CA", "+1", 10),
    Country("Cape Verde", "CV", "+238", 7),
    Country("Cayman Islands", "KY", "+1", 10),
    Country("Central African Republic", "CF", "+236", 8),
    Country("Chad", "TD", "+235", 8),
    Country("Chile", "CL", "+56", 9),
    Country("China", "CN", "+86", 11),
    Country("Christmas Island", "CX", "+61", 9),
    Country("Cocos (Keeling) Islands", "CC", "+61", 9),
    Country("Colombia", "CO", "+57", 10),
    Country("Comoros", "KM", "+269", 7),
    Country("Congo", "CG", "+242", 9),
    Country("Congo, Democratic Republic of the", "CD", "+243", 9),
    Country("Cook Islands", "CK", "+682", 5),
    Country("Costa Rica", "CR", "+506", 8),
    Country("Côte d'Ivoire", "CI", "+225", 10),
    Country("Croatia", "HR", "+385", 9),
    Country("Cuba", "CU", "+53", 8),
    Country("Curaçao", "CW", "+599", 8),
    Country("Cyprus", "CY", "+357", 8),
    Country("Czech Republic", "CZ", "+420", 9),
    Country("Denmark", "DK", "+45", 8),
    Country("Djibouti", "DJ", "+253", 8),
    Country("Dominica", "DM", "+1", 10),
    Country("Dominican Republic", "DO", "+1", 10),
    Country("Ecuador", "EC", "+593", 9),
    Country("Egypt", "EG", "+20", 10),
    Country("El Salvador", "SV", "+503", 8),
    Country("Equatorial Guinea", "GQ", "+240", 9),
    Country("Eritrea", "ER", "+291", 7),
    Country("Estonia", "EE", "+372", 8),
    Country("Ethiopia", "ET", "+251", 9),
    Country("Falkland Islands", "FK", "+500", 5),
    Country("Faroe Islands", "FO", "+298", 6),
    Country("Fiji", "FJ", "+679", 7),
    Country("Finland", "FI", "+358", 12),
    Country("France", "FR", "+33", 9),
    Country("French Guiana", "GF", "+594", 9),
    Country("French Polynesia", "PF", "+689", 6),
    Country("Gabon", "GA", "+241", 8),
    Country("Gambia", "GM", "+220", 7),
    Country("Georgia", "GE", "+995", 9),
    Country("Germany", "DE", "+49", 11),
    Country("Ghana", "GH", "+233", 9),
    Country("Gibraltar", "GI", "+350", 8),
    Country("Greece", "GR", "+30", 10),
    Country("Greenland", "GL", "+299", 6),
    Country("Grenada", "GD", "+1", 10),
    Country("Guadeloupe", "GP", "+590", 9),
    Country("Guam", "GU", "+1", 10),
    Country("Guatemala", "GT", "+502", 8),
    Country("Guernsey", "GG", "+44", 10),
    Country("Guinea", "GN", "+224", 9),
    Country("Guinea-Bissau", "GW", "+245", 9),
    Country("Guyana", "GY", "+592", 7),
    Country("Haiti", "HT", "+509", 8),
    Country("Honduras", "HN", "+504", 8),
    Country("Hong Kong", "HK", "+852", 8),
    Country("Hungary", "HU", "+36", 9),
    Country("Iceland", "IS", "+354", 7),
    Country("India", "IN", "+91", 10),
    Country("Indonesia", "ID", "+62", 13),
    Country("Iran", "IR", "+98", 10),
    Country("Iraq", "IQ", "+964", 10),
    Country("Ireland", "IE", "+353", 9),
    Country("Isle of Man", "IM", "+44", 10),
    Country("Israel", "IL", "+972", 9),
    Country("Italy", "IT", "+39", 10),
    Country("Jamaica", "JM", "+1", 10),
    Country("Japan", "JP", "+81", 10),
    Country("Jersey", "JE", "+44", 10),
    Country("Jordan", "JO", "+962", 9),
    Country("Kazakhstan", "KZ", "+7", 10),
    Country("Kenya", "KE", "+254", 9),
    Country("Kiribati", "KI", "+686", 5),
    Country("Kosovo", "XK", "+383", 8),
    Country("Kuwait", "KW", "+965", 8),
    Country("Kyrgyzstan", "KG", "+996", 9),
    Country("Laos", "LA", "+856", 10),
    Country("Latvia", "LV", "+371", 8),
    Country("Lebanon", "LB", "+961", 8),
    Country("Lesotho", "LS", "+266", 8),
    Country("Liberia", "LR", "+231", 8),
    Country("Libya", "LY", "+218", 9),
    Country("Liechtenstein", "LI", "+423", 7),
    Country("Lithuania", "LT", "+370", 8),
    Country("Luxembourg", "LU", "+352", 11),
    Country("Macau", "MO", "+853", 8),
    Country("Macedonia (North)", "MK", "+389", 8),
    Country("Madagascar", "MG", "+261", 9),
    Country("Malawi", "MW", "+265", 9),
    Country("Malaysia", "MY", "+60", 10),
    Country("Maldives", "MV", "+960", 7),
    Country("Mali", "ML", "+223", 8),
    Country("Malta", "MT", "+356", 8),
    Country("Marshall Islands", "MH", "+692", 7),
    Country("Martinique", "MQ", "+596", 9),
    Country("Mauritania", "MR", "+222", 8),
    Country("Mauritius", "MU", "+230", 8),
    Country("Mayotte", "YT", "+262", 9),
    Country("Mexico", "MX", "+52", 10),
    Country("Micronesia", "FM", "+691", 7),
    Country("Moldova", "MD", "+373", 8),
    Country("Monaco", "MC", "+377", 9),
    Country("Mongolia", "MN", "+976", 8),
    Country("Montenegro", "ME", "+382", 8),
    Country("Montserrat", "MS", "+1", 10),
    Country("Morocco", "MA", "+212", 9),
    Country("Mozambique", "MZ", "+258", 9),
    Country("Myanmar", "MM", "+95", 10),
    Country("Namibia", "NA", "+264", 9),
    Country("Nauru", "NR", "+674", 7),
    Country("Nepal", "NP", "+977", 10),
    Country("Netherlands", "NL", "+31", 9),
    Country("New Caledonia", "NC", "+687", 6),
    Country("New Zealand", "NZ", "+64", 10),
    Country("Nicaragua", "NI", "+505", 8),
    Country("Niger", "NE", "+227", 8),
    Country("Nigeria", "NG", "+234", 10),
    Country("Niue", "NU", "+683", 4),
    Country("Norfolk Island", "NF", "+672", 6),
    Country("North Korea", "KP", "+850", 10),
    Country("Northern Mariana Islands", "MP", "+1", 10),
    Country("Norway", "NO", "+47", 8),
    Country("Oman", "OM", "+968", 8),
    Country("Pakistan", "PK", "+92", 10),
    Country("Palau", "PW", "+680", 7),
    Country("Palestine", "PS", "+970", 9),
    Country("Panama", "PA", "+507", 8),
    Country("Papua New Guinea", "PG", "+675", 8),
    Country("Paraguay", "PY", "+595", 9),
    Country("Peru", "PE", "+51", 9),
    Country("Philippines", "PH", "+63", 10),
    Country("Poland", "PL", "+48", 9),
    Country("Portugal", "PT", "+351", 9),
    Country("Puerto Rico", "PR", "+1", 10),
    Country("Qatar", "QA", "+974", 8),
    Country("Réunion", "RE", "+262", 9),
    Country("Romania", "RO", "+40", 9),
    Country("Russia", "RU", "+7", 10),
    Country("Rwanda", "RW", "+250", 9),
    Country("Saint Barthélemy", "BL", "+590", 9),
    Country("Saint Helena", "SH", "+290", 5),
    Country("Saint Kitts and Nevis", "KN", "+1", 10),
    Country("Saint Lucia", "LC", "+1", 10),
    Country("Saint Martin", "MF", "+590", 9),
    Country("Saint Pierre and Miquelon", "PM", "+508", 6),
    Country("Saint Vincent and the Grenadines", "VC", "+1", 10),
    Country("Samoa", "WS", "+685", 7),
    Country("San Marino", "SM", "+378", 10),
    Country("Sao Tome and Principe", "ST", "+239", 7),
    Country("Saudi Arabia", "SA", "+966", 9),
    Country("Senegal", "SN", "+221", 9),
    Country("Serbia", "RS", "+381", 9),
    Country("Seychelles", "SC", "+248", 7),
    Country("Sierra Leone", "SL", "+232", 8),
    Country("Singapore", "SG", "+65", 8),
    Country("Sint Maarten", "SX", "+1", 10),
    Country("Slovakia", "SK", "+421", 9),
    Country("Slovenia", "SI", "+386", 8),
    Country("Solomon Islands", "SB", "+677", 7),
    Country("Somalia", "SO", "+252", 9),
    Country("South Africa", "ZA", "+27", 9),
    Country("South Korea", "KR", "+82", 10),
    Country("South Sudan", "SS", "+211", 9),
    Country("Spain", "ES", "+34", 9),
    Country("Sri Lanka", "LK", "+94", 9),
    Country("Sudan", "SD", "+249", 9),
    Country("Suriname", "SR", "+597", 7),
    Country("Svalbard and Jan Mayen", "SJ", "+47", 8),
    Country("Swaziland", "SZ", "+268", 8),
    Country("Sweden", "SE", "+46", 13),
    Country("Switzerland", "CH", "+41", 9),
    Country("Syria", "SY", "+963", 9),
    Country("Taiwan", "TW", "+886", 9),
    Country("Tajikistan", "TJ", "+992", 9),
    Country("Tanzania", "TZ", "+255", 9),
    Country("Thailand", "TH", "+66", 9),
    Country("Timor-Leste", "TL", "+670", 8),
    Country("Togo", "TG", "+228", 8),
    Country("Tokelau", "TK", "+690", 4),
    Country("Tonga", "TO", "+676", 7),
    Country("Trinidad and Tobago", "TT", "+1", 10),
    Country("Tunisia", "TN", "+216", 8),
    Country("Turkey", "TR", "+90", 10),
    Country("Turkmenistan", "TM", "+993", 8),
    Country("Turks and Caicos Islands", "TC", "+1", 10),
    Country("Tuvalu", "TV", "+688", 6),
    Country("Uganda", "UG", "+256", 9),
    Country("Ukraine", "UA", "+380", 9),
    Country("United Arab Emirates", "AE", "+971", 9),
    Country("United Kingdom", "GB", "+44", 10),
    Country("United States", "US", "+1", 10),
    Country("Uruguay", "UY", "+598", 8),
    Country("US Virgin Islands", "VI", "+1", 10),
    Country("Uzbekistan", "UZ", "+998", 9),
    Country("Vanuatu", "VU", "+678", 7),
    Country("Vatican City", "VA", "+39", 10),
    Country("Venezuela", "VE", "+58", 10),
    Country("Vietnam", "VN", "+84", 10),
    Country("Wallis and Futuna", "WF", "+681", 6),
    Country("Yemen", "YE", "+967", 9),
    Country("Zambia", "ZM", "+260", 9),
    Country("Zimbabwe", "ZW", "+263", 9),
]

_BY_CODE = {country.code: country for country in COUNTRIES}
_BY_NAME = {country.name.lower(): country for country in COUNTRIES}


def search_countries(query: str) -> List[Country]:
    lowered = query.lower()
    return [
        country for country in COUNTRIES
        if lowered in country.name.lower()
        or lowered in country.code.lower()
        or query in country.phone_code
    ]


def get_country_by_code(code: str) -> Optional[Country]:
    return _BY_CODE.get(code.upper()) if code else None


def get_country_by_phone_code(phone_code: str) -> Optional[Country]:
    """First country using the dialling code. Shared codes (+1, +7, ...) resolve to the first entry."""
    for country in COUNTRIES:
        if country.phone_code == phone_code:
            return country
    return None


def find_country(value: Optional[str]) -> Optional[Country]:
    """Resolve a country by ISO code or by name (case-insensitive)."""
    if not value or not value.strip():
        return None
    value = value.strip()
    return _BY_CODE.get(value.upper()) or _BY_NAME.get(value.lower())
