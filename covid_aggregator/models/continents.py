from enum import Enum
from types import MappingProxyType


class Continent(str, Enum):
    AFRICA = 'Africa'
    ASIA = 'Asia'
    EUROPE = 'Europe'
    NORTH_AMERICA = 'North America'
    SOUTH_AMERICA = 'South America'
    OCEANIA = 'Oceania'
    OTHER = 'Other'          # fallback bucket for names missing from the lookup


def _assign(continent: Continent, *countries: str) -> dict[str, Continent]:
    return {country: continent for country in countries}


# Keys are the Country/Region labels used in the Johns Hopkins CSSE global files
COUNTRY_TO_CONTINENT = MappingProxyType({
    **_assign(
        Continent.AFRICA,
        'Algeria', 'Angola', 'Benin', 'Botswana', 'Burkina Faso', 'Burundi',
        'Cabo Verde', 'Cameroon', 'Central African Republic', 'Chad', 'Comoros',
        'Congo (Brazzaville)', 'Congo (Kinshasa)', "Cote d'Ivoire", 'Djibouti',
        'Egypt', 'Equatorial Guinea', 'Eritrea', 'Eswatini', 'Ethiopia', 'Gabon',
        'Gambia', 'Ghana', 'Guinea', 'Guinea-Bissau', 'Kenya', 'Lesotho',
        'Liberia', 'Libya', 'Madagascar', 'Malawi', 'Mali', 'Mauritania',
        'Mauritius', 'Morocco', 'Mozambique', 'Namibia', 'Niger', 'Nigeria',
        'Rwanda', 'Sao Tome and Principe', 'Senegal', 'Seychelles',
        'Sierra Leone', 'Somalia', 'South Africa', 'South Sudan', 'Sudan',
        'Tanzania', 'Togo', 'Tunisia', 'Uganda', 'Western Sahara', 'Zambia',
        'Zimbabwe',
    ),
    **_assign(
        Continent.ASIA,
        'Afghanistan', 'Armenia', 'Azerbaijan', 'Bahrain', 'Bangladesh', 'Bhutan',
        'Brunei', 'Burma', 'Cambodia', 'China', 'Georgia', 'India', 'Indonesia',
        'Iran', 'Iraq', 'Israel', 'Japan', 'Jordan', 'Kazakhstan',
        'Korea, North', 'Korea, South', 'Kuwait', 'Kyrgyzstan', 'Laos',
        'Lebanon', 'Malaysia', 'Maldives', 'Mongolia', 'Nepal', 'Oman',
        'Pakistan', 'Philippines', 'Qatar', 'Saudi Arabia', 'Singapore',
        'Sri Lanka', 'Syria', 'Taiwan*', 'Tajikistan', 'Thailand', 'Timor-Leste',
        'Turkey', 'United Arab Emirates', 'Uzbekistan', 'Vietnam',
        'West Bank and Gaza', 'Yemen',
    ),
    **_assign(
        Continent.EUROPE,
        'Albania', 'Andorra', 'Austria', 'Belarus', 'Belgium',
        'Bosnia and Herzegovina', 'Bulgaria', 'Croatia', 'Cyprus', 'Czechia',
        'Denmark', 'Estonia', 'Finland', 'France', 'Germany', 'Greece',
        'Holy See', 'Hungary', 'Iceland', 'Ireland', 'Italy', 'Kosovo', 'Latvia',
        'Liechtenstein', 'Lithuania', 'Luxembourg', 'Malta', 'Moldova', 'Monaco',
        'Montenegro', 'Netherlands', 'North Macedonia', 'Norway', 'Poland',
        'Portugal', 'Romania', 'Russia', 'San Marino', 'Serbia', 'Slovakia',
        'Slovenia', 'Spain', 'Sweden', 'Switzerland', 'Ukraine',
        'United Kingdom',
    ),
    **_assign(
        Continent.NORTH_AMERICA,
        'Antigua and Barbuda', 'Bahamas', 'Barbados', 'Belize', 'Canada',
        'Costa Rica', 'Cuba', 'Dominica', 'Dominican Republic', 'El Salvador',
        'Grenada', 'Guatemala', 'Haiti', 'Honduras', 'Jamaica', 'Mexico',
        'Nicaragua', 'Panama', 'Saint Kitts and Nevis', 'Saint Lucia',
        'Saint Vincent and the Grenadines', 'Trinidad and Tobago', 'US',
    ),
    **_assign(
        Continent.SOUTH_AMERICA,
        'Argentina', 'Bolivia', 'Brazil', 'Chile', 'Colombia', 'Ecuador',
        'Guyana', 'Paraguay', 'Peru', 'Suriname', 'Uruguay', 'Venezuela',
    ),
    **_assign(
        Continent.OCEANIA,
        'Australia', 'Fiji', 'Kiribati', 'Marshall Islands', 'Micronesia',
        'Nauru', 'New Zealand', 'Palau', 'Papua New Guinea', 'Samoa',
        'Solomon Islands', 'Tonga', 'Tuvalu', 'Vanuatu',
    ),
})


def get_continent(country: str) -> Continent:
    """Resolve a country label to its continent, falling back to Continent.OTHER."""
    return COUNTRY_TO_CONTINENT.get(country, Continent.OTHER)
