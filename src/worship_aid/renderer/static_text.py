"""Fixed liturgical texts used in booklet generation.

Texts the operator never edits: creeds, the Confiteor, the people's parts
of the Order of Mass, rubrics, and the default copyright block.  Everything
week-specific (readings, psalm, music) comes from the WeeklyRecord.
"""

from __future__ import annotations

# ── Liturgical / typographic symbols ──────────────────────────────────
CROSS = "☩"       # ☩  rubric marker
MALTESE = "✠"     # ✠  sign of the cross in the blessing

RUBRICS = {
    "stand": f"{CROSS} Please stand.",
    "sit": f"{CROSS} Please be seated.",
    "kneel": f"{CROSS} Please kneel.",
}

NICENE_CREED = (
    "I believe in one God,\n"
    "the Father almighty,\n"
    "maker of heaven and earth,\n"
    "of all things visible and invisible.\n"
    "\n"
    "I believe in one Lord Jesus Christ,\n"
    "the Only Begotten Son of God,\n"
    "born of the Father before all ages.\n"
    "God from God, Light from Light,\n"
    "true God from true God,\n"
    "begotten, not made, consubstantial with the Father;\n"
    "through him all things were made.\n"
    "For us men and for our salvation\n"
    "he came down from heaven,\n"
    "and by the Holy Spirit was incarnate of the Virgin Mary,\n"
    "and became man.\n"
    "For our sake he was crucified under Pontius Pilate,\n"
    "he suffered death and was buried,\n"
    "and rose again on the third day\n"
    "in accordance with the Scriptures.\n"
    "He ascended into heaven\n"
    "and is seated at the right hand of the Father.\n"
    "He will come again in glory\n"
    "to judge the living and the dead\n"
    "and his kingdom will have no end.\n"
    "\n"
    "I believe in the Holy Spirit, the Lord, the giver of life,\n"
    "who proceeds from the Father and the Son,\n"
    "who with the Father and the Son is adored and glorified,\n"
    "who has spoken through the prophets.\n"
    "\n"
    "I believe in one, holy, catholic and apostolic Church.\n"
    "I confess one Baptism for the forgiveness of sins\n"
    "and I look forward to the resurrection of the dead\n"
    "and the life of the world to come. Amen."
)

APOSTLES_CREED = (
    "I believe in God,\n"
    "the Father almighty,\n"
    "Creator of heaven and earth,\n"
    "and in Jesus Christ, his only Son, our Lord,\n"
    "who was conceived by the Holy Spirit,\n"
    "born of the Virgin Mary,\n"
    "suffered under Pontius Pilate,\n"
    "was crucified, died and was buried;\n"
    "he descended into hell;\n"
    "on the third day he rose again from the dead;\n"
    "he ascended into heaven,\n"
    "and is seated at the right hand of God the Father almighty;\n"
    "from there he will come to judge the living and the dead.\n"
    "\n"
    "I believe in the Holy Spirit,\n"
    "the holy catholic Church,\n"
    "the communion of saints,\n"
    "the forgiveness of sins,\n"
    "the resurrection of the body,\n"
    "and life everlasting. Amen."
)

CONFITEOR = (
    "I confess to almighty God\n"
    "and to you, my brothers and sisters,\n"
    "that I have greatly sinned,\n"
    "in my thoughts and in my words,\n"
    "in what I have done and in what I have failed to do,\n"
    "through my fault, through my fault,\n"
    "through my most grievous fault;\n"
    "therefore I ask blessed Mary ever-Virgin,\n"
    "all the Angels and Saints,\n"
    "and you, my brothers and sisters,\n"
    "to pray for me to the Lord our God."
)

GLORIA = (
    "Glory to God in the highest,\n"
    "and on earth peace to people of good will.\n"
    "We praise you, we bless you, we adore you, we glorify you,\n"
    "we give you thanks for your great glory,\n"
    "Lord God, heavenly King, O God, almighty Father.\n"
    "\n"
    "Lord Jesus Christ, Only Begotten Son,\n"
    "Lord God, Lamb of God, Son of the Father,\n"
    "you take away the sins of the world, have mercy on us;\n"
    "you take away the sins of the world, receive our prayer;\n"
    "you are seated at the right hand of the Father, have mercy on us.\n"
    "\n"
    "For you alone are the Holy One, you alone are the Lord,\n"
    "you alone are the Most High, Jesus Christ,\n"
    "with the Holy Spirit, in the glory of God the Father. Amen."
)

GOSPEL_ACCLAMATION_STANDARD = "Alleluia, alleluia!"

INVITATION_TO_PRAYER = (
    ("Priest", "Pray, brethren, that my sacrifice and yours may be acceptable "
               "to God, the almighty Father."),
    ("All", "May the Lord accept the sacrifice at your hands for the praise "
            "and glory of his name, for our good and the good of all his holy Church."),
)

HOLY_HOLY_HOLY = (
    "Holy, Holy, Holy Lord God of hosts.\n"
    "Heaven and earth are full of your glory.\n"
    "Hosanna in the highest.\n"
    "Blessed is he who comes in the name of the Lord.\n"
    "Hosanna in the highest."
)

MYSTERY_OF_FAITH = (
    "We proclaim your Death, O Lord,\n"
    "and profess your Resurrection\n"
    "until you come again."
)

LORDS_PRAYER = (
    "Our Father, who art in heaven,\n"
    "hallowed be thy name;\n"
    "thy kingdom come,\n"
    "thy will be done\n"
    "on earth as it is in heaven.\n"
    "Give us this day our daily bread,\n"
    "and forgive us our trespasses,\n"
    "as we forgive those who trespass against us;\n"
    "and lead us not into temptation,\n"
    "but deliver us from evil."
)

AGNUS_DEI = (
    "Lamb of God, you take away the sins of the world, have mercy on us.\n"
    "Lamb of God, you take away the sins of the world, have mercy on us.\n"
    "Lamb of God, you take away the sins of the world, grant us peace."
)

ADVENT_WREATH_LIGHTING = (
    "Lighting of the Advent Wreath\n"
    "O Lord, stir up your power and come. "
    "As we light this candle, scatter the darkness of our hearts "
    "by the light of your coming."
)

CHILDRENS_LITURGY_INVITATION = (
    "Children are invited to come forward after the Collect to celebrate "
    "the Liturgy of the Word at their own level. They will return at the "
    "Offertory."
)

BLESSING_AND_DISMISSAL = (
    ("Priest", "The Lord be with you."),
    ("All", "And with your spirit."),
    ("Priest", "May almighty God bless you, the Father, and the Son, "
               f"{MALTESE} and the Holy Spirit."),
    ("All", "Amen."),
    ("Deacon", "Go forth, the Mass is ended."),
    ("All", "Thanks be to God."),
)

PRAYER_OF_THE_FAITHFUL_RUBRIC = "Intentions are read; the assembly responds."

WELCOME_MESSAGE = (
    "Welcome to our parish community.\n"
    "We are glad you are here to worship with us today."
)

DEFAULT_COPYRIGHT = (
    "Excerpts from the Lectionary for Mass for Use in the Dioceses of the "
    "United States of America, second typical edition © 2001, 1998, 1997, "
    "1986, 1970 Confraternity of Christian Doctrine, Inc., Washington, DC. "
    "Used with permission. All rights reserved.\n"
    "\n"
    "Excerpts from the English translation of The Roman Missal © 2010, "
    "International Commission on English in the Liturgy Corporation. "
    "All rights reserved.\n"
    "\n"
    "Music reprinted under OneLicense #A-702171. All rights reserved."
)
