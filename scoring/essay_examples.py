"""Scored example essays included in the content scoring prompt."""
from __future__ import annotations

from typing import Tuple

_ESSAY_1 = (
    "OK the movie i like to talk about is the cove it is very say phenomenal sensational "
    "documentary about adopting hunting practices in japan i think the director is "
    "called well i think the name escapes me anyway but well let's talk about the movie "
    "basically it's about dolphin hunting practices in japan there's a small village "
    "where where villagers fisherman Q almost twenty thousand dolphins on a yearly basis "
    "which is brutal and just explain massacre this book has influenced me a lot i still "
    "remember the first time i saw this movie i think it was in middle school one of my "
    "teachers showed it to all the class or the class and i remember we were going "
    "through some really boring topics like animal protection at that time it was really "
    "boring to me but right before everyone was going to just sleep in the class the "
    "teacher decided to put the textbook down and show us a clear from this document "
    "documentary we were shocked speechless to see the has of the dolphins chopped off "
    "and left on the beach and the C turning bloody red with their blood which is i felt "
    "sick i couldn't need fish for a whole week and it was lasting impression if not "
    "scarring impression and i think this movie is still very meaningful and it despite "
    "me a lot especially on wildlife protection dolphins or search beautiful intelligent "
    "animals of the sea and why do villagers and fishermen in japan killed it i assume "
    "there was a great benefit to its skin or some scientific research but the ironic "
    "thing is that they only kill them for the meat because the meat taste great that "
    "sickens me for awhile and i think the book inspired me to do a lot of different to "
    "do a lot of things about well i protection i follow news like"
)

_ESSAY_2 = (
    "yes i can speak how to this movie is it is worth young wolf young man this is this "
    "movie from korea it's a crime movies the movies on the movies speaker speaker or "
    "words of young man love hello a cow are you saying they end so i have to go to the "
    "go to the america or ha ha ha lots of years a go on the woman the woman is very old "
    "he talk to korea he carpool i want to go to the this way this whole home house this "
    "house is a is hey so what's your man and at the end the girl cause so there's a "
    "woman open open hum finally finds other wolf so what's your young man so the young "
    "man don't so yeah man the young man remember he said here's a woman also so am i "
    "it's very it's very very sad she is she is a crack credit thank you "
)

_ESSAY_3 = (
    "yes i want i want to talk about the TV series are enjoying watching a discount name "
    "is a friends and it's uh accommodate in the third decades decades an it come out "
    "the third decades and its main characters about a six friends live in the NYC but i "
    "watched it a long time ago i can't remember the name of them and the story is about "
    "what they are happening in their in their life and there are many things treating "
    "them and how the friendship are hard friendship and how the french how the strong "
    "strongly friendship they obtain them and they always have some funny things happen "
    "they only have happened something funny things and is a comedy so that was uh so "
    "many and i like this be cause of first adult cause it has a funding it has a "
    "farming serious and it can improve my english english words and on the other hand "
    "it can i can know about a lot of cultures about the united states and i i first "
    "hear about death TV series it's come out of a website and i took into and i watch "
    "it after my after my finish my studies and when i was a bad mood when i when i'm in "
    "a bad mood or i "
)

# (transcript, vocabulary, grammar)
EXAMPLE_ESSAYS: Tuple[Tuple[str, float, float], ...] = (
    (_ESSAY_1, 80.0, 80.0),
    (_ESSAY_2, 40.0, 43.0),
    (_ESSAY_3, 50.0, 50.0),
)
