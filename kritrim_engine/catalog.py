"""Selection vocabularies: eras, cultural looks, imagination options and filters."""

from __future__ import annotations

from dataclasses import dataclass


MAX_QUICK_TRIP_ERAS = 6


@dataclass(frozen=True)
class EraCategory:
    name: str
    eras: tuple[str, ...]


@dataclass(frozen=True)
class FilterSpec:
    name: str
    description: str


ERA_CATEGORIES: tuple[EraCategory, ...] = (
    EraCategory(
        name="Ancient & Mythological",
        eras=(
            "Ancient Egyptian Pharaoh",
            "Roman Gladiator",
            "Viking Warrior",
            "Feudal Japan Samurai",
            "Ramayana Era Royalty",
            "Greek Philosopher",
            "Aztec Priest",
            "Medieval Knight",
        ),
    ),
    EraCategory(
        name="Historical & Cultural",
        eras=(
            "Renaissance Artist",
            "Elizabethan Noble",
            "Golden Age Pirate",
            "French Revolutionist",
            "Victorian Era Explorer",
            "Roaring Twenties Flapper",
            "1940s Film Noir Detective",
            "1950s Rock & Roll Star",
            "1960s Hippie",
            "1970s Disco Dancer",
            "1980s Neon Punk",
            "1990s Grunge Musician",
            "2000s Y2K Pop Icon",
            "Wild West Outlaw",
            "1970s Bollywood Star",
            "Indian Maharaja",
        ),
    ),
    EraCategory(
        name="Artistic Styles",
        eras=(
            "as an Impressionist Painting",
            "as a Cubist Portrait",
            "in the Art Deco style",
            "as a Surrealist Dream",
            "as a Pop Art piece",
            "as a Baroque Painting",
            "as a Minimalist line drawing",
        ),
    ),
    EraCategory(
        name="Future & Sci-Fi",
        eras=(
            "Cyberpunk Hacker",
            "Solarpunk Botanist",
            "Galactic Space Explorer",
            "Steampunk Inventor",
            "Post-Apocalyptic Survivor",
            "Utopian Future Citizen",
            "Starship Captain",
        ),
    ),
    EraCategory(
        name="Fantasy",
        eras=(
            "as a High Elf",
            "as a Dwarven Blacksmith",
            "as a powerful Sorcerer",
            "as a Forest Fairy",
            "as a DnD-style Rogue",
        ),
    ),
)

ALL_ERAS: tuple[str, ...] = tuple(era for category in ERA_CATEGORIES for era in category.eras)

CULTURAL_LOOKS: dict[str, tuple[str, ...]] = {
    # Africa
    "Egypt": ("Galabeya", "Bedouin traditional dress"),
    "Ethiopia": ("Habesha Kemis", "Oromo traditional wear"),
    "Ghana": ("Kente cloth", "Adinkra cloth smock"),
    "Kenya": ("Maasai Shuka and beadwork", "Kikuyu traditional attire", "Swahili Kanga"),
    "Morocco": ("Djellaba", "Kaftan", "Berber traditional dress"),
    "Nigeria": ("Yoruba Aso Oke", "Igbo Isiagu", "Hausa Babban Riga", "Efik traditional attire"),
    "South Africa": ("Zulu traditional attire (Umhbaco)", "Xhosa beadwork clothing", "Ndebele patterned blankets"),

    # Americas
    "Argentina": ("Gaucho traditional wear", "Tango dress"),
    "Bolivia": ("Pollera skirt and Bowler hat", "Aymara traditional dress"),
    "Brazil": ("Bahian dress (Baiana)", "Samba costume", "Gaúcho bombachas"),
    "Canada": ("First Nations ceremonial regalia", "Métis sash", "Inuit amauti"),
    "Chile": ("Huaso and Huasa attire", "Mapuche traditional dress"),
    "Colombia": ("Sombrero Vueltiao and white shirt", "Cumbia pollera dress"),
    "Guatemala": ("Maya huipil and corte", "Quetzaltenango traje"),
    "Mexico": ("Jalisco Mariachi suit", "Veracruz Jarocha dress", "Yucatán Huipil", "Oaxaca Tehuana dress", "Chiapas Parachico costume"),
    "Peru": ("Andean Poncho and Chullo", "Quechua Lliklla mantle", "Shipibo-Conibo geometric patterns"),
    "United States": ("Native American powwow regalia", "Hawaiian Aloha shirt and muʻumuʻu", "Cajun Mardi Gras costume"),

    # Asia
    "Afghanistan": ("Pashtun Khet partug", "Hazara traditional dress"),
    "Bhutan": ("Gho for men", "Kira for women"),
    "China": ("Hanfu", "Qipao (Cheongsam)", "Tibetan Chuba", "Miao ethnic embroidery"),
    "India": (
        "Andhra Pradesh - Langa Voni / Saree",
        "Arunachal Pradesh - Adi traditional attire",
        "Arunachal Pradesh - Apatani traditional attire",
        "Arunachal Pradesh - Nyishi traditional attire",
        "Arunachal Pradesh - Galo traditional attire",
        "Arunachal Pradesh - Monpa traditional attire",
        "Assam - Bodo traditional attire (Dokhona)",
        "Assam - Mishing traditional attire (Ege)",
        "Assam - Karbi traditional attire (Pini-pekok)",
        "Assam - Dimasa traditional attire (Rigu)",
        "Bihar - Saree (Seedha Anchal style)",
        "Chhattisgarh - Lugda Saree / Polkha",
        "Goa - Pano Bhaju / Nav-Vari Saree",
        "Gujarat - Chaniya Choli / Ghagra",
        "Haryana - Ghagra / Odhni",
        "Himachal Pradesh - Pattu / Salwar Kameez",
        "Jharkhand - Saree / Panchi Parhan",
        "Karnataka - Ilkal & Mysore Silk Sarees",
        "Kerala - Mundum Neriyathum / Kasavu Saree",
        "Madhya Pradesh - Chanderi & Maheshwari Sarees",
        "Maharashtra - Nauvari Saree / Paithani Saree",
        "Manipur - Meitei (Phanek, Innaphi)",
        "Manipur - Tangkhul Naga attire",
        "Manipur - Rongmei (Kabui) Naga attire",
        "Manipur - Thadou Kuki attire",
        "Meghalaya - Khasi (Jainsem)",
        "Meghalaya - Garo (Dakmanda)",
        "Meghalaya - Jaintia (Pnar) attire",
        "Mizoram - Puan (Lushai, Hmar, Lai)",
        "Mizoram - Chakma traditional attire",
        "Nagaland - Angami Naga shawls",
        "Nagaland - Ao Naga warrior attire",
        "Nagaland - Konyak Naga traditional dress",
        "Nagaland - Sumi (Sema) Naga attire",
        "Nagaland - Lotha Naga shawls",
        "Odisha - Sambalpuri & Bomkai Sarees",
        "Punjab - Patiala Salwar Kameez",
        "Rajasthan - Ghagra Choli / Rajputi Poshak",
        "Sikkim - Bhutia (Bakhu/Kho)",
        "Sikkim - Lepcha (Dumdyám)",
        "Sikkim - Limbu traditional attire",
        "Tamil Nadu - Kanjeevaram Saree / Pavadai Dhavani",
        "Telangana - Pochampally & Gadwal Sarees",
        "Tripura - Tripuri (Rignai, Risa)",
        "Tripura - Reang (Bru) traditional attire",
        "Tripura - Chakma traditional attire",
        "Uttar Pradesh - Chikankari Saree / Salwar Kameez",
        "Uttarakhand - Ghagri / Pichora",
        "West Bengal - Tant & Baluchari Sarees",
    ),
    "Indonesia": ("Batik shirt", "Kebaya", "Balinese temple dress"),
    "Iran": ("Persian traditional clothing", "Kurdish traditional dress"),
    "Japan": ("Kimono formal wear", "Yukata summer wear", "Ainu traditional dress", "Ryukyuan from Okinawa"),
    "Kazakhstan": ("Shapan (caftan)", "Saukele headdress"),
    "Korea": ("Hanbok formal wear", "Jeogori and Chima"),
    "Malaysia": ("Baju Melayu for men", "Baju Kurung for women"),
    "Mongolia": ("Deel", "Gutal boots"),
    "Nepal": ("Daura-Suruwal and Gunyu-Cholo", "Newari traditional wear"),
    "Pakistan": ("Shalwar Kameez", "Sindhi Ajrak"),
    "Philippines": ("Barong Tagalog for men", "Maria Clara Gown for women", "Igorot traditional wear"),
    "Saudi Arabia": ("Thobe and Ghutra for men", "Abaya and Niqab for women"),
    "Thailand": ("Chut Thai (Thai formal dress)", "Hill tribe traditional clothing"),
    "Turkey": ("Ottoman-style Kaftan", "Anatolian folk dress"),
    "Vietnam": ("Áo Dài", "Áo Tứ Thân (four-part dress)"),

    # Europe
    "Austria": ("Lederhosen", "Dirndl"),
    "England": ("Morris dancing costume", "Beefeater uniform"),
    "Finland": ("Kansallispuku (national costume)",),
    "France": ("Breton traditional dress", "Alsatian costume"),
    "Germany": ("Bavarian Lederhosen and Dirndl", "Black Forest Tracht"),
    "Greece": ("Foustanella", "Amalia costume"),
    "Hungary": ("Matyó embroidery", "Kalocsai folk dress"),
    "Iceland": ("Þjóðbúningurinn (national costume)",),
    "Ireland": ("Aran sweater", "Irish dancing dress"),
    "Italy": ("Sardinian traditional dress", "Sicilian folk costume"),
    "Netherlands": ("Volendam traditional costume", "Zeeland regional dress"),
    "Norway": ("Bunad (national costume)",),
    "Poland": ("Kraków folk costume", "Goral (highlander) outfit"),
    "Portugal": ("Minho region Traje de Viana", "Nazaré fishermen clothing"),
    "Romania": ("Ie (traditional blouse)", "Carpathian folk costume"),
    "Russia": ("Sarafan", "Kosovorotka shirt", "Ushanka hat"),
    "Scotland": ("Highland kilt and tartan", "Shetland Fair Isle knitwear"),
    "Spain": ("Andalusian Flamenco dress", "Traje de Fallera (Valencia)", "Basque traditional clothing"),
    "Sweden": ("Sverigedräkten (national costume)", "Sami Gákti"),
    "Switzerland": ("Appenzeller Tracht", "Berner Tracht"),
    "Ukraine": ("Vyshyvanka (embroidered shirt)", "Sharovary trousers"),

    # Oceania
    "Australia": ("Aboriginal ceremonial dress", "Akubra hat and Driza-Bone coat"),
    "Fiji": ("Sulu (sarong)", "Tapa cloth"),
    "New Zealand": ("Māori Kākahu (cloak)", "Piupiu skirt"),
    "Papua New Guinea": ("Highlands ceremonial dress", "Trobriand Islands grass skirts"),
    "Samoa": ("Lavalava", "Puletasi"),
}

PREDEFINED_STYLES: tuple[str, ...] = (
    "Photorealistic",
    "Cinematic",
    "Oil Painting",
    "Watercolor",
    "Pencil Sketch",
    "Anime / Manga",
    "Concept Art",
    "Pixel Art",
    "Cyberpunk",
    "Steampunk",
    "Vintage Photo",
    "Minimalist",
)

UNSPECIFIED_FIGURE_SIZE = "Unspecified"

FIGURE_SIZE_OPTIONS: tuple[str, ...] = (
    UNSPECIFIED_FIGURE_SIZE,
    "Slim",
    "Athletic",
    "Average",
    "Curvy",
    "Muscular",
    "Broad-shouldered",
    "Petite",
)

ASPECT_RATIO_OPTIONS: tuple[str, ...] = (
    "Portrait (3:4)",
    "Landscape (4:3)",
    "Widescreen (16:9)",
    "Square (1:1)",
)

IMAGE_FRAMING_OPTIONS: tuple[str, ...] = (
    "Full Body Shot",
    "Medium Shot (Waist Up)",
    "Cowboy Shot (Mid-thigh Up)",
    "Close-up Portrait",
    "Extreme Close-up",
)

FILTERS: tuple[FilterSpec, ...] = (
    FilterSpec("Vintage Film", "Classic, grainy look with faded colors, reminiscent of old film stock."),
    FilterSpec("Noir B&W", "High-contrast black and white with deep shadows and dramatic lighting."),
    FilterSpec("Sepia Tone", "Warm, brownish monochrome for an antique, historical photograph feel."),
    FilterSpec("Golden Hour", "Soft, warm, and diffused lighting as if shot during sunrise or sunset."),
    FilterSpec("Sun Flare", "Adds a bright, artistic lens flare effect, suggesting strong sunlight."),
    FilterSpec("Light Leaks", "Simulates streaks of colored light caused by an old camera's light leak."),
    FilterSpec("Lomography", "Vibrant, saturated colors, high contrast, and vignetting for a quirky look."),
    FilterSpec("Cyanotype", "A striking cyan-blue monochrome print, like an old architectural blueprint."),
    FilterSpec(
        "Ghibli Art",
        "Transforms the photo into the beautiful, hand-drawn animation style of Studio Ghibli films, "
        "with lush backgrounds and soft characters.",
    ),
    FilterSpec("Glitch Art", "Digital distortion, pixelation, and color shifts for a modern, techy feel."),
    FilterSpec(
        "Double Exposure",
        "Blends the original photo with a second, often thematic, image like a forest or cityscape.",
    ),
    FilterSpec("Infrared Photo", "Surreal look where foliage turns white and skies darken dramatically."),
    FilterSpec("Anamorphic Lens Flare", "Adds cinematic, horizontal blueish lens flares across the image."),
)

FILTER_NAMES: tuple[str, ...] = tuple(spec.name for spec in FILTERS)


def regions_for(country: str | None) -> tuple[str, ...]:
    if not country:
        return ()
    return CULTURAL_LOOKS.get(country, ())


def get_filter(name: str | None) -> FilterSpec | None:
    for spec in FILTERS:
        if spec.name == name:
            return spec
    return None
