# Material groups (materiaalgroepen) used to classify products.
MATERIAL_GROUPS = (
    ("01", "Diversen", "Isolatiematerialen, funderingsmaterialen, elektromaterialen, rioleringsmaterialen, "
                       "rubbers (kozijnen), folies, voegklemmen, spouwankers, etc."),
    ("02", "Pur & Kit", "Pur, kitten, aanverwanten als cleaner, primer, etc."),
    ("03", "Montage", "Schroeven, kozijnschroeven, vulplaatjes, Hannoband, etc."),
    ("04", "Afwerking", "Vensterbanken (kunststof/hardsteen), afwerklijsten (kunststof/MDF), "
                        "binnendeurdorpels, douchedorpels, etc."),
    ("05", "Gevelbekledingen", "Rabat, gevelsteen, volkern kunststof, etc."),
    ("06", "Hout", "Houten balken, houten beplating, etc."),
    ("07", "Zakgoed", "Mortels (metselen/stuc), etc."),
    ("08", "Tapes en bescherming", "Ducttape, paneltap, primacover, etc."),
    ("09", "Gereserveerd", "Gereserveerd voor toekomstig gebruik"),
    ("10", "Gereserveerd", "Gereserveerd voor toekomstig gebruik"),
)

FALLBACK_WORK_CODE_NAME = "Niet gespecificeerd"
